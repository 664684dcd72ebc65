
import argparse
import pytest
from floatcmp import cli


def test_inspect_single_value(capsys):

    assert cli.main(['--width', '32', '-1.5']) == 0

    out = capsys.readouterr().out
    assert 'bits:         0xbfc00000' in out
    assert 'sign:         1' in out
    assert 'exponent:     0x3f800000 (biased 127)' in out
    assert 'significand:  0x00400000' in out
    assert 'class:        normal' in out


@pytest.mark.parametrize('value, kind', [
    ('nan', 'nan'), ('inf', 'infinite'), ('0.0', 'zero'), ('-0.0', 'zero'), ('0x1p-1074', 'subnormal'),
])
def test_classification(capsys, value, kind):

    assert cli.main([value]) == 0
    assert f'class:        {kind}' in capsys.readouterr().out


def test_almost_equal(capsys):

    assert cli.main(['--width', '32', '1.0', '0x1.000008p+0']) == 0

    out = capsys.readouterr().out
    assert 'ulp distance: 4' in out
    assert 'result:       almost equal' in out


def test_not_equal(capsys):

    assert cli.main(['--width', '32', '1.0', '0x1.00000ap+0']) == 1

    out = capsys.readouterr().out
    assert 'ulp distance: 5' in out
    assert 'result:       not equal' in out


def test_opposite_signs(capsys):

    assert cli.main(['1.0', '-1.0']) == 1

    out = capsys.readouterr().out
    assert 'ulp distance' not in out
    assert 'result:       not equal' in out


def test_custom_tolerance(capsys):

    assert cli.main(['--width', '32', '--max-ulps', '5', '1.0', '0x1.00000ap+0']) == 0
    capsys.readouterr()
    assert cli.main(['-v', '--max-diff', '0.01', '1.0', '1.005']) == 0
    out = capsys.readouterr().out
    assert 'max_diff:     0.01' in out
    assert 'max_ulps:     4' in out


def test_invalid_tolerance(capsys):

    assert cli.main(['--max-diff', '-1', '1.0', '1.0']) == 2
    assert 'Error: Absolute tolerance must be non-negative' in capsys.readouterr().out


def test_invalid_value():

    with pytest.raises(SystemExit):
        cli.main(['one'])


@pytest.mark.parametrize('text, value', [('1.5', 1.5), ('0x1p-2', 0.25), ('-0x1.8p1', -3.0), ('1e-3', 1e-3)])
def test_parse_float(text, value):

    assert cli.parse_float(text) == value


def test_parse_float_rejects_garbage():

    with pytest.raises(argparse.ArgumentTypeError, match="invalid floating point value: 'abc'"):
        cli.parse_float('abc')
