import logging
import re

from . import base, types
from .repository import Repository

logger = logging.getLogger(__name__)

MAX_SUMMARY_SIZE = 50

NO_TEMPLATE_MATCH = 'No template match commit message'


def message_match_template(message: str, template: str) -> bool:
    # anchored at the start, and the matched text must be the whole message
    match = re.match(template, message)
    return match is not None and match.group(0) == message


def summary(message: str) -> str:
    return message.split('\n', 1)[0].strip()


def is_valid_summary_length(summary_: str, length: int = MAX_SUMMARY_SIZE) -> bool:
    return len(summary_) <= length


def is_merge_commit(commit_: types.Commit) -> bool:
    return len(commit_.parents) == 2


def match_message(message: str, matchers: types.Matchers, options: types.Options = types.Options(),
                  oid: types.OID | None = None) -> types.Matching | None:
    message_error = NO_TEMPLATE_MATCH
    for name, template in matchers.items():
        if message_match_template(message, template):
            logger.debug('message matched by %s', name)
            message_error = None
            break

    summary_error = None
    if options.check_summary_length and not is_valid_summary_length(summary(message), options.summary_length):
        summary_error = f'Commit summary length is greater than {options.summary_length} characters'

    if message_error is None and summary_error is None:
        return None
    return types.Matching(oid=oid, message=message, message_error=message_error, summary_error=summary_error)


def match_commit(repository: Repository, oid: types.OID, matchers: types.Matchers,
                 options: types.Options = types.Options()) -> types.Matching | None:
    return _match_commit(base.fetch_commit_by_id(repository, oid), matchers, options)


def _match_commit(commit_: types.Commit, matchers, options) -> types.Matching | None:
    if options.exclude_merge_commits and is_merge_commit(commit_):
        logger.debug('skipping merge commit %s', commit_.oid)
        return None
    return match_message(commit_.message, matchers, options, oid=commit_.oid)


def match_range(repository: Repository, from_ref: str, to_ref: str, matchers: types.Matchers,
                options: types.Options = types.Options()) -> list[types.Matching]:
    matchings = []
    for commit_ in base.fetch_interval(repository, from_ref, to_ref):
        if matching := _match_commit(commit_, matchers, options):
            matchings.append(matching)
    return matchings
