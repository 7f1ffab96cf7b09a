"""Shared test fixtures."""

from pathlib import Path

import pytest

from swtparser.config import Settings
from swtparser.schema import SchemaStore


DATA_DIR = Path(__file__).resolve().parent / 'data'

FIXTURE_LENGTH = 19


def build_swt(players, rounds, teams=(), version=700, fixtures=None, team_fixtures=None, name=b'Open'):
    """Build the binary content of a tournament file following the structure
    files under tests/data.

    players and teams are lists of (id, name, ...) tuples; fixtures maps the
    position of a player to the list of (opponent id, color, result) for each
    round and team_fixtures the position of a team to (opponent id, points).
    """
    base, card = (13384, 655) if version >= 800 else (3894, 292)
    n, t = len(players), len(teams)

    data = bytearray(base + (n + t) * rounds * FIXTURE_LENGTH + (n + t) * card)

    data[0:2] = n.to_bytes(2, 'little')
    data[2:4] = t.to_bytes(2, 'little')
    data[4] = rounds
    data[5] = 0xff if teams else 0x00
    data[6:8] = version.to_bytes(2, 'big')
    blob = name + b'\x00junk'
    data[8:8 + len(blob)] = blob
    data[0x28] = 0x01

    for idx in range(n):
        for round_ in range(rounds):
            opponent, color, result = (fixtures or {}).get(idx, [(0, 0, 0)] * rounds)[round_]
            pos = base + (idx * rounds + round_) * FIXTURE_LENGTH
            data[pos:pos + 3] = bytes([opponent, color, result])

    team_fixtures_start = base + n * rounds * FIXTURE_LENGTH
    for idx in range(t):
        for round_ in range(rounds):
            opponent, points = (team_fixtures or {}).get(idx, [(0, 0)] * rounds)[round_]
            pos = team_fixtures_start + (idx * rounds + round_) * FIXTURE_LENGTH
            data[pos:pos + 2] = bytes([opponent, points])

    players_start = base + (n + t) * rounds * FIXTURE_LENGTH
    for idx, (player_id, player_name, elo, *club) in enumerate(players):
        pos = players_start + idx * card
        data[pos:pos + len(player_name)] = player_name
        data[pos + 0x20] = player_id
        data[pos + 0x21:pos + 0x23] = elo.to_bytes(2, 'little')
        if club:
            data[pos + 0x30:pos + 0x30 + len(club[0])] = club[0]

    teams_start = players_start + n * card
    for idx, (team_id, team_name) in enumerate(teams):
        pos = teams_start + idx * card
        data[pos:pos + len(team_name)] = team_name
        data[pos + 0x20] = team_id

    return bytes(data)


@pytest.fixture(scope='session')
def data_dir() -> Path:
    """Path to the directory containing the structure files."""
    return DATA_DIR


@pytest.fixture
def store(data_dir):
    return SchemaStore(data_dir)


@pytest.fixture
def settings(data_dir):
    return Settings(root=data_dir)


@pytest.fixture
def swt():
    return build_swt


@pytest.fixture
def single_tournament():
    """Four players, three rounds, version 7."""
    players = [
        (1, b'Anna', 1800),
        (2, b'Bernd', 1750),
        (3, b'Clara', 1600),
        (4, b'Dieter', 1500),
    ]
    fixtures = {
        0: [(2, 1, 1), (3, 2, 2), (0, 0, 0)],
        1: [(1, 2, 0), (4, 1, 1), (3, 2, 1)],
        2: [(4, 1, 1), (1, 1, 0), (2, 1, 0)],
        3: [(3, 2, 0), (2, 2, 0), (9, 1, 1)],
    }
    return build_swt(players, 3, fixtures=fixtures)
