# utils.py
"""
Utility functions for the starfield host.

Logging setup and configuration loading: used by the entry point, not by
the field or the renderer themselves.
"""
import logging
import logging.handlers
import json
import os
from typing import Dict, Any

# --- Data Contracts ---
#
# setup_logging(config: Dict[str, Any]) -> None:
#   - Inputs:
#     - config: A dictionary with an optional "logging" key holding
#       "level", "format" and "log_file" sub-keys.
#   - Side Effects: Replaces the root logger's handlers with a console
#     handler and a rotating file handler. Creates the log directory.
#
# load_config(path: str) -> Dict[str, Any]:
#   - Outputs: The parsed JSON document, with "particles" defaulted to {}
#     and "run_control" merged over RUN_CONTROL_DEFAULTS.
#   - Errors: FileNotFoundError and json.JSONDecodeError are logged and
#     re-raised. A document that is not an object, a section that is not
#     an object, or a malformed run_control value raises ValueError after
#     a CRITICAL log.

DEFAULT_LOG_FORMAT = '%(asctime)s - %(levelname)s - %(message)s'
DEFAULT_LOG_FILE = 'logs/starfield.log'

RUN_CONTROL_DEFAULTS = {
    'max_frames': 0,  # 0 runs until the window is closed
    'log_throttle_frames': 600,
    'profile': False,
}


def setup_logging(config: Dict[str, Any]) -> None:
    """
    Configures the root logger to write to the console and a rotating file.
    """
    log_config = config.get('logging', {})
    log_level = log_config.get('level', 'INFO').upper()
    log_format = log_config.get('format', DEFAULT_LOG_FORMAT)
    log_file_path = log_config.get('log_file', DEFAULT_LOG_FILE)

    log_dir = os.path.dirname(log_file_path)
    if log_dir:
        os.makedirs(log_dir, exist_ok=True)

    logger = logging.getLogger()
    logger.setLevel(log_level)
    if logger.hasHandlers():
        logger.handlers.clear()

    formatter = logging.Formatter(log_format)

    console_handler = logging.StreamHandler()
    console_handler.setFormatter(formatter)
    logger.addHandler(console_handler)

    # 1MB per file, 5 backups.
    file_handler = logging.handlers.RotatingFileHandler(
        log_file_path, maxBytes=1024*1024, backupCount=5
    )
    file_handler.setFormatter(formatter)
    logger.addHandler(file_handler)

    logging.info(f"Logging initialized at {log_level}. Log file: {log_file_path}")


def load_config(path: str) -> Dict[str, Any]:
    """
    Loads the JSON configuration file and checks its shape.

    The "particles" section must be an object if present; it is validated
    key by key later by FieldConfiguration. The "run_control" section is
    merged over RUN_CONTROL_DEFAULTS so callers can index it directly.
    """
    logging.info(f"Loading configuration from {path}...")
    try:
        with open(path, 'r') as f:
            config = json.load(f)
    except FileNotFoundError:
        logging.error(f"Configuration file not found at {path}.")
        raise
    except json.JSONDecodeError as e:
        logging.error(f"Error decoding JSON from {path}: {e}")
        raise

    if not isinstance(config, dict):
        _config_error(f"{path} must hold a JSON object, got {type(config).__name__}.")
    for section in ('logging', 'particles', 'run_control'):
        if not isinstance(config.get(section, {}), dict):
            _config_error(f"'{section}' must be an object, got {config[section]!r}.")

    config['particles'] = config.get('particles', {})
    config['run_control'] = _run_control(config.get('run_control', {}))
    logging.info(f"Configuration loaded with sections: {', '.join(config)}.")
    return config


def _run_control(section: Dict[str, Any]) -> Dict[str, Any]:
    run_control = {**RUN_CONTROL_DEFAULTS, **section}
    for key in ('max_frames', 'log_throttle_frames'):
        value = run_control[key]
        # bool is an int subclass; reject it like any other non-integer.
        if isinstance(value, bool) or not isinstance(value, int) or value < 0:
            _config_error(f"run_control.{key} must be a non-negative integer, got {value!r}.")
    if run_control['log_throttle_frames'] == 0:
        _config_error("run_control.log_throttle_frames must be at least 1.")
    if not isinstance(run_control['profile'], bool):
        _config_error(f"run_control.profile must be true or false, got {run_control['profile']!r}.")
    return run_control


def _config_error(msg: str):
    msg = f"Configuration error: {msg}"
    logging.critical(msg)
    raise ValueError(msg)
