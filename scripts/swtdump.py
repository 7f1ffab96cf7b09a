#!/usr/bin/env python3
import sys
import os
import logging

from swtparser.tournament import parse
from swtparser.config import Settings
from swtparser.exceptions import SWTParserException


logging.basicConfig(level=logging.DEBUG if 'DEBUG' in os.environ else logging.INFO)
logger = logging.getLogger(__name__)


def usage(progname):
    print(f'''usage: {progname} <swt file> [--audit]

The structure files are searched in the directory indicated by the
SWTPARSER_STRUCTURE_DIR environment variable (default the current directory).''')
    sys.exit(1)


def dump_fields(fields, indent='  '):
    width = max([len(_) for _ in fields] + [0])
    for label, value in fields.items():
        print(f'{indent}{label:<{width}} {value!r}')


def dump_records(title, records):
    print(f'{title} ({len(records)}):')
    for record_id, fields in records.items():
        print(f' [{record_id}]')
        dump_fields(fields, indent='    ')


def dump_fixtures(title, fixtures, opponent_label):
    print(f'{title}:')
    for record_id, rounds in fixtures.items():
        line = ' '.join(f'{round_}:{fixture.get(opponent_label) or "-"}' for round_, fixture in rounds.items())
        print(f' [{record_id}] {line}')


def dump_audit(audit):
    print('Layout:')
    for entry in audit:
        print(f'  {entry}')


if __name__ == '__main__':
    if len(sys.argv) < 2:
        usage(sys.argv[0])

    path = sys.argv[1]
    settings = Settings()
    opponent_label = settings.labels.opponent_name

    try:
        tournament = parse(path, settings)
    except SWTParserException as e:
        logger.error(f'failed to parse \'{path}\': {e}')
        sys.exit(2)

    print('General data:')
    dump_fields(tournament.header)

    if tournament.teams:
        dump_records('Teams', tournament.teams)
    dump_records('Players', tournament.players)

    if tournament.team_fixtures:
        dump_fixtures('Team fixtures', tournament.team_fixtures, opponent_label)
    dump_fixtures('Player fixtures', tournament.player_fixtures, opponent_label)

    if '--audit' in sys.argv[2:]:
        dump_audit(tournament.audit)
