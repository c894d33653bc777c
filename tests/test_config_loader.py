import pytest
from unittest.mock import mock_open

from qres.services import config_loader
from qres.analysis.models import DEFAULT_FMEA_THRESHOLDS, DEFAULT_CAPABILITY_THRESHOLDS

# This is a fake config.ini file that we'll "load"
FAKE_INI_CONTENT = """
[basic]
verbosity = 2
log_file = logs/qres.log

[fmea_thresholds]
severity = 8
rpn = 120

[capability_thresholds]
capable = 1.67
min_samples = 30
"""

BAD_INI_CONTENT = """
[fmea_thresholds]
rpn = abc
critical_rpn = 250

[capability_thresholds]
marginal = high
"""


def test_load_config_parses_correctly(mocker):
    """
    Tests that the loader correctly parses strings and integers.
    """
    mocker.patch("builtins.open", mock_open(read_data=FAKE_INI_CONTENT))
    mocker.patch("os.path.exists", return_value=True)

    config = config_loader.load_config(section='basic')

    assert config['log_file'] == 'logs/qres.log'
    # Check that it correctly converted the integer keys
    assert config['verbosity'] == 2
    assert isinstance(config['verbosity'], int)


def test_load_config_raises_file_not_found(mocker):
    mocker.patch("os.path.exists", return_value=False)

    with pytest.raises(FileNotFoundError):
        config_loader.load_config(section='basic')


def test_load_config_raises_missing_section(mocker):
    mocker.patch("builtins.open", mock_open(read_data=FAKE_INI_CONTENT))
    mocker.patch("os.path.exists", return_value=True)

    with pytest.raises(KeyError):
        config_loader.load_config(section='postgresql')


def test_load_fmea_thresholds_partial(mocker):
    """Options present in the file override defaults, the rest stay default."""
    mocker.patch("builtins.open", mock_open(read_data=FAKE_INI_CONTENT))
    mocker.patch("os.path.exists", return_value=True)

    thresholds = config_loader.load_fmea_thresholds()

    assert thresholds.severity == 8
    assert thresholds.rpn == 120
    assert isinstance(thresholds.rpn, int)
    assert thresholds.detection == DEFAULT_FMEA_THRESHOLDS.detection
    assert thresholds.critical_rpn == DEFAULT_FMEA_THRESHOLDS.critical_rpn


def test_load_capability_thresholds_partial(mocker):
    mocker.patch("builtins.open", mock_open(read_data=FAKE_INI_CONTENT))
    mocker.patch("os.path.exists", return_value=True)

    thresholds = config_loader.load_capability_thresholds()

    assert thresholds.capable == 1.67
    assert thresholds.min_samples == 30
    assert thresholds.marginal == DEFAULT_CAPABILITY_THRESHOLDS.marginal


def test_invalid_values_fall_back_to_defaults(mocker):
    mocker.patch("builtins.open", mock_open(read_data=BAD_INI_CONTENT))
    mocker.patch("os.path.exists", return_value=True)

    fmea = config_loader.load_fmea_thresholds()
    capability = config_loader.load_capability_thresholds()

    assert fmea.rpn == DEFAULT_FMEA_THRESHOLDS.rpn
    assert fmea.critical_rpn == 250
    assert capability.marginal == DEFAULT_CAPABILITY_THRESHOLDS.marginal


def test_missing_file_returns_defaults(mocker):
    mocker.patch("os.path.exists", return_value=False)

    assert config_loader.load_fmea_thresholds() is DEFAULT_FMEA_THRESHOLDS
    assert config_loader.load_capability_thresholds() is DEFAULT_CAPABILITY_THRESHOLDS


def test_missing_section_returns_defaults(mocker):
    mocker.patch("builtins.open", mock_open(read_data="[basic]\nverbosity = 1\n"))
    mocker.patch("os.path.exists", return_value=True)

    assert config_loader.load_fmea_thresholds() is DEFAULT_FMEA_THRESHOLDS


def test_load_from_sample_config():
    """The shipped sample_config.ini documents the default values."""
    fmea = config_loader.load_fmea_thresholds('sample_config.ini')
    capability = config_loader.load_capability_thresholds('sample_config.ini')

    assert fmea == DEFAULT_FMEA_THRESHOLDS
    assert capability == DEFAULT_CAPABILITY_THRESHOLDS
