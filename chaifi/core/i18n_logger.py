"""
Internationalized structured logging
Log calls carry a translation key plus parameters, rendered in the configured language
"""
import logging
import json
import sys
from enum import StrEnum
from typing import Dict, Optional
from pathlib import Path
from chaifi.config import LANG, LOGLEVEL


DEFAULT_LOCALES_DIR = Path(__file__).resolve().parent.parent / "locales"


class LogLevel(StrEnum):
    """Standard logging levels"""
    DEBUG = "DEBUG"
    INFO = "INFO"
    WARNING = "WARNING"
    ERROR = "ERROR"
    CRITICAL = "CRITICAL"


class I18nLogger:
    """
    Logger that writes translation keys instead of free text.

    A call such as:

        logger.info("sale.recorded", transaction_id="172...", total="30.00")

    looks up "sale.recorded" in locales/<lang>.json and renders
    "Sale 172... recorded for 30.00". The key and the raw parameters are kept
    on the log record (``translation_key``, ``params``) so log shippers can
    index them without parsing the message.
    """

    _translations_cache: Dict[str, Dict[str, str]] = {}
    _configured_loggers: set = set()

    def __init__(self, name: str, translations_dir: Optional[str] = None):
        self.logger = logging.getLogger(name)
        self.translations_dir = Path(translations_dir) if translations_dir else DEFAULT_LOCALES_DIR

        # Configure logger only once per name
        if name not in I18nLogger._configured_loggers:
            self._configure_logger()
            I18nLogger._configured_loggers.add(name)

    def _configure_logger(self):
        """Attach a colored stdout handler at LOGLEVEL"""
        self.logger.handlers.clear()

        log_level = getattr(logging, LOGLEVEL, logging.INFO)
        self.logger.setLevel(log_level)

        console_handler = logging.StreamHandler(sys.stdout)
        console_handler.setLevel(log_level)
        console_handler.setFormatter(ColoredFormatter(
            '%(asctime)s - %(name)s - %(levelname)s - %(message)s',
            datefmt='%Y-%m-%d %H:%M:%S'
        ))
        self.logger.addHandler(console_handler)

        # Keep records out of the root logger so uvicorn does not print them twice
        self.logger.propagate = False

    def _load_translations(self, language: str) -> Dict[str, str]:
        """Load translation file for a language (cached)"""
        if language in I18nLogger._translations_cache:
            return I18nLogger._translations_cache[language]

        translation_file = self.translations_dir / f"{language}.json"
        if not translation_file.exists():
            translation_file = self.translations_dir / "en.json"
            if not translation_file.exists():
                self.logger.warning(f"No translation file found for {language}, using keys as-is")
                return {}

        try:
            with open(translation_file, 'r', encoding='utf-8') as f:
                translations = json.load(f)
        except (OSError, json.JSONDecodeError) as e:
            self.logger.error(f"Failed to load translations for {language}: {e}")
            return {}

        I18nLogger._translations_cache[language] = translations
        return translations

    def _format_message(self, key: str, language: str = LANG, **kwargs) -> str:
        """
        Translate a key and substitute its parameters.

        Unknown keys are logged verbatim; a template referencing a missing
        parameter is still logged, with the missing name appended.
        """
        template = self._load_translations(language).get(key, key)

        try:
            return template.format_map(kwargs)
        except KeyError as e:
            return f"{template} (missing params: {e})"
        except (ValueError, IndexError):
            return key

    def _log_structured(self, level: LogLevel, key: str, language: str = LANG, **kwargs):
        message = self._format_message(key, language, **kwargs)
        extra = {
            'translation_key': key,
            'params': kwargs,
            'language': language
        }
        getattr(self.logger, level.value.lower())(message, extra=extra)

    def debug(self, key: str, language: str = LANG, **kwargs):
        """Log debug message with translation"""
        self._log_structured(LogLevel.DEBUG, key, language, **kwargs)

    def info(self, key: str, language: str = LANG, **kwargs):
        """Log info message with translation"""
        self._log_structured(LogLevel.INFO, key, language, **kwargs)

    def warning(self, key: str, language: str = LANG, **kwargs):
        """Log warning message with translation"""
        self._log_structured(LogLevel.WARNING, key, language, **kwargs)

    def error(self, key: str, language: str = LANG, **kwargs):
        """Log error message with translation"""
        self._log_structured(LogLevel.ERROR, key, language, **kwargs)

    def critical(self, key: str, language: str = LANG, **kwargs):
        """Log critical message with translation"""
        self._log_structured(LogLevel.CRITICAL, key, language, **kwargs)


class ColoredFormatter(logging.Formatter):
    """Formatter that colors the level name"""

    COLORS = {
        'DEBUG': '\033[36m',     # Cyan
        'INFO': '\033[32m',      # Green
        'WARNING': '\033[33m',   # Yellow
        'ERROR': '\033[31m',     # Red
        'CRITICAL': '\033[35m',  # Magenta
    }
    RESET = '\033[0m'

    def format(self, record):
        # Color a copy so other handlers still see the plain level name
        record = logging.makeLogRecord(record.__dict__)
        if record.levelname in self.COLORS:
            record.levelname = f"{self.COLORS[record.levelname]}{record.levelname}{self.RESET}"
        return super().format(record)


def get_i18n_logger(name: str, translations_dir: Optional[str] = None) -> I18nLogger:
    """
    Get or create an i18n logger instance

    Args:
        name: Logger name (usually __name__)
        translations_dir: Optional custom path to translations directory

    Returns:
        Configured I18nLogger instance
    """
    return I18nLogger(name, translations_dir)
