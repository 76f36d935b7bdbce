"""Load and validate ``.revlint.toml``.

The file holds three tables::

    [config]
    check-summary-length = true
    exclude-merge-commits = true
    summary-length = 50

    [matchers]
    simple = "(?:feat|fix)\\(.*?\\) : .*?\\n"

    [examples]
    a_simple_commit = "feat(module) : A commit message"

Only ``[config]`` is optional.
"""
import logging
import re
import tomllib
from typing import NamedTuple

from . import types
from .errors import ConfigError

logger = logging.getLogger(__name__)

DEFAULT_CONFIG_FILE = '.revlint.toml'

_OPTIONS = {
    'check-summary-length': ('check_summary_length', bool),
    'exclude-merge-commits': ('exclude_merge_commits', bool),
    'summary-length': ('summary_length', int),
}


class Config(NamedTuple):
    matchers: types.Matchers
    examples: dict[str, str]
    options: types.Options


def load_config(path=DEFAULT_CONFIG_FILE) -> Config:
    try:
        with open(path, 'rb') as f:
            raw = tomllib.load(f)
    except FileNotFoundError:
        raise ConfigError(f'Config file "{path}" can\'t be found') from None
    except (OSError, UnicodeDecodeError) as e:
        raise ConfigError(f'Config file "{path}" can\'t be read: {e}') from e
    except tomllib.TOMLDecodeError as e:
        raise ConfigError(f'Config file "{path}" is not a valid TOML file: {e}') from e

    logger.debug('config loaded from %s', path)
    return parse_config(raw)


def parse_config(raw: dict) -> Config:
    matchers = _string_table(raw, 'matchers')
    if not matchers:
        raise ConfigError('At least one matcher must be defined')

    examples = _string_table(raw, 'examples')
    if not examples:
        raise ConfigError('At least one example must be defined')

    for name, matcher in matchers.items():
        try:
            re.compile(matcher)
        except re.error:
            raise ConfigError(
                f'Regexp "{matcher}" identified by "{name}" is not a valid regexp, please check the syntax'
            ) from None

    return Config(matchers=matchers, examples=examples, options=_parse_options(raw.get('config', {})))


def _string_table(raw, name) -> dict[str, str]:
    table = raw.get(name, {})
    if not isinstance(table, dict):
        raise ConfigError(f'"{name}" must be a table')
    for key, value in table.items():
        if not isinstance(value, str):
            raise ConfigError(f'Entry "{key}" of "{name}" must be a string')
    return dict(table)


def _parse_options(table) -> types.Options:
    if not isinstance(table, dict):
        raise ConfigError('"config" must be a table')

    options = {}
    for key, value in table.items():
        if key not in _OPTIONS:
            logger.warning('unknown option "%s" ignored', key)
            continue
        field, type_ = _OPTIONS[key]
        # bool is an int subclass, reject it explicitly for int options
        if not isinstance(value, type_) or (type_ is int and isinstance(value, bool)):
            raise ConfigError(f'Option "{key}" must be a {type_.__name__}')
        options[field] = value
    return types.Options(**options)
