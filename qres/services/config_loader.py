# qres/services/config_loader.py
import os
import logging
from configparser import ConfigParser
from dataclasses import fields
from typing import Dict, Any

logger = logging.getLogger(__name__)


def _config_path(filename: str) -> str:
    module_path = os.path.dirname(os.path.abspath(__file__))
    return os.path.join(module_path, '..', '..', 'config', filename)


def load_config(filename: str = 'config.ini', section: str = 'basic') -> Dict[str, Any]:
    """
    Loads a specific section from the config.ini file.

    Args:
        filename (str): The name of the config file (default: 'config.ini').
        section (str): The [section] in the INI file to load.

    Returns:
        Dict[str, Any]: A dictionary of the settings.

    Raises:
        FileNotFoundError: If the config file cannot be found.
        KeyError: If the specified section is not found in the file.
    """
    config_path = _config_path(filename)

    if not os.path.exists(config_path):
        logger.error(f"Configuration file not found at: {config_path}")
        raise FileNotFoundError(f"Configuration file not found at: {config_path}")

    parser = ConfigParser()
    parser.read(config_path)

    if not parser.has_section(section):
        logger.error(f"Section '{section}' not found in the {config_path} file")
        raise KeyError(f"Section '{section}' not found in the {config_path} file")

    # Keys that should be converted to integers
    int_keys = {'verbosity'}

    config: Dict[str, Any] = {}
    for key, value in parser.items(section):
        if key in int_keys and value:
            try:
                config[key] = int(value)
            except ValueError:
                logger.warning(f"Invalid integer value for '{key}': {value}. Using None.")
                config[key] = None
        else:
            config[key] = value

    return config


def _load_thresholds(filename: str, section: str, cls, defaults):
    """
    Builds a thresholds dataclass from an INI section.

    Each dataclass field is read with the getter matching its declared type
    (int or float). Missing file, section or option keeps the default.
    """
    config_path = _config_path(filename)

    if not os.path.exists(config_path):
        logger.info(f"Config file not found at {config_path}, using default {cls.__name__}")
        return defaults

    parser = ConfigParser()
    parser.read(config_path)

    if not parser.has_section(section):
        logger.debug(f"No [{section}] section in config, using defaults")
        return defaults

    kwargs = {}
    for f in fields(cls):
        if not parser.has_option(section, f.name):
            continue
        getter = parser.getint if f.type in (int, 'int') else parser.getfloat
        try:
            kwargs[f.name] = getter(section, f.name)
        except ValueError as e:
            logger.warning(f"Invalid value for '{f.name}': {e}. Using default.")

    default_dict = {f.name: getattr(defaults, f.name) for f in fields(cls)}
    default_dict.update(kwargs)

    logger.info(f"Loaded {cls.__name__} from {config_path} ({len(kwargs)} custom parameters)")
    return cls(**default_dict)


def load_fmea_thresholds(filename: str = 'config.ini'):
    """
    Loads FMEA thresholds from the [fmea_thresholds] section.

    Returns:
        FMEAThresholds: Values from config, defaults for anything missing
    """
    from ..analysis.models import FMEAThresholds, DEFAULT_FMEA_THRESHOLDS
    return _load_thresholds(filename, 'fmea_thresholds', FMEAThresholds, DEFAULT_FMEA_THRESHOLDS)


def load_capability_thresholds(filename: str = 'config.ini'):
    """
    Loads capability limits from the [capability_thresholds] section.

    Returns:
        CapabilityThresholds: Values from config, defaults for anything missing
    """
    from ..analysis.models import CapabilityThresholds, DEFAULT_CAPABILITY_THRESHOLDS
    return _load_thresholds(
        filename, 'capability_thresholds', CapabilityThresholds, DEFAULT_CAPABILITY_THRESHOLDS
    )
