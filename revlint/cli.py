import argparse
import logging
import os
import sys

from . import config, matching, ui
from .data import is_oid
from .errors import RevlintError
from .repository import open_repository
from .version import get_version


def main(argv=None):
    args = parse_args(argv)
    if args.verbose:
        logging.basicConfig(level=logging.DEBUG, format='%(name)s: %(message)s')

    try:
        code = args.func(args)
    except RevlintError as e:
        ui.failure(e)
        code = 1
    sys.exit(code)


def commit_id(value):
    if not is_oid(value):
        raise argparse.ArgumentTypeError('argument must be a valid commit id')
    return value


def directory(value):
    if not os.path.exists(value):
        raise argparse.ArgumentTypeError(f'Ensure "{value}" directory exists')
    if not os.path.isdir(value):
        raise argparse.ArgumentTypeError(f'"{value}" must be a directory')
    return value


def parse_args(argv=None):
    parser = argparse.ArgumentParser(prog='revlint', description='Ensure your commit messages are consistent')
    parser.add_argument('--config', default=config.DEFAULT_CONFIG_FILE)
    parser.add_argument('-v', '--verbose', action='store_true')
    commands = parser.add_subparsers(dest='command')
    commands.required = True

    check_parser = commands.add_parser('check', help='check messages follow defined patterns')
    checks = check_parser.add_subparsers(dest='check')
    checks.required = True

    message_parser = checks.add_parser('message', help='check a message')
    message_parser.set_defaults(func=check_message)
    message_parser.add_argument('message')

    commit_parser = checks.add_parser('commit', help='check a commit message')
    commit_parser.set_defaults(func=check_commit)
    commit_parser.add_argument('id', type=commit_id)
    commit_parser.add_argument('path', default='.', type=directory, nargs='?')

    range_parser = checks.add_parser('range', help='check messages in a revision range')
    range_parser.set_defaults(func=check_range)
    range_parser.add_argument('from_ref', metavar='from')
    range_parser.add_argument('to_ref', metavar='to')
    range_parser.add_argument('path', default='.', type=directory, nargs='?')

    version_parser = commands.add_parser('version', help='app version')
    version_parser.set_defaults(func=version)

    return parser.parse_args(argv)


def check_message(args):
    conf = config.load_config(args.config)
    matching_ = matching.match_message(args.message, conf.matchers, conf.options)
    return process_match_result([matching_] if matching_ else [], conf.examples)


def check_commit(args):
    conf = config.load_config(args.config)
    repository = open_repository(args.path)
    matching_ = matching.match_commit(repository, args.id, conf.matchers, conf.options)
    return process_match_result([matching_] if matching_ else [], conf.examples)


def check_range(args):
    conf = config.load_config(args.config)
    repository = open_repository(args.path)
    matchings = matching.match_range(repository, args.from_ref, args.to_ref, conf.matchers, conf.options)
    return process_match_result(matchings, conf.examples)


def process_match_result(matchings, examples):
    if matchings:
        ui.render_matchings(matchings)
        ui.render_examples(examples)
        return 1

    ui.success('Everything is ok')
    return 0


def version(args):
    ui.info(get_version())
    return 0
