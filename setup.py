from setuptools import setup, find_packages

MAJOR = 0
MINOR = 1
MICRO = 0
VERSION = '%d.%d.%d' % (MAJOR, MINOR, MICRO)


def readme():
    with open('README.md') as f:
        content = f.read()
    return content[:content.find('## Tests')]


setup(
    name='floatcmp',
    version=VERSION,
    license='Apache License, Version 2.0',
    description='Almost-equal comparison of IEEE-754 floats by absolute epsilon and ULP distance',
    long_description=readme(),
    long_description_content_type='text/markdown',
    author='The floatcmp Authors',
    packages=find_packages(exclude=['tests']),
    python_requires='>=3.9',
    install_requires=[
        'numpy >= 1.26.0',
    ],
    extras_require={
        'dev': [
            'pytest >= 6.2.4',
        ],
    },
    entry_points={
        'console_scripts': [
            'floatcmp = floatcmp.cli:main',
        ],
    },
)
