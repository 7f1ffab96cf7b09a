'''
Settings for the parser.

The names of the structure files and the labels used inside them are part of
the structure files contract, so they are collected here instead of being
spread through the code. The defaults follow the structure files shipped
with the original SwissChess parser.
'''
import os
from dataclasses import dataclass, field
from pathlib import Path


STRUCTURE_DIR_ENV = 'SWTPARSER_STRUCTURE_DIR'


def default_structure_root() -> Path:
    return Path(os.environ.get(STRUCTURE_DIR_ENV, os.getcwd()))


@dataclass(frozen=True)
class SchemaNames:
    header: str          = 'allgemein'
    players: str         = 'spieler'
    teams: str           = 'mannschaft'
    player_fixtures: str = 'einzelpaarungen'
    team_fixtures: str   = 'mannschaftspaarungen'


@dataclass(frozen=True)
class Labels:
    # header
    participants: str    = 'Teilnehmerzahl'
    teams: str           = 'Mannschaftszahl'
    max_rounds: str      = 'maximale Runden'
    team_tournament: str = 'Mannschaftsturnier'
    version: str         = 'FILEVERSION'
    # index cards
    player_id: str   = 'TNr.-ID'
    team_id: str     = 'MNr.-ID'
    player_name: str = 'Spielername'
    team_name: str   = 'Mannschaft'
    # fixtures
    opponent: str      = 'Gegner'
    opponent_name: str = 'Gegner_lang'


@dataclass(frozen=True)
class Settings:
    root: Path = field(default_factory=default_structure_root)
    prefix: str = 'structure'
    encoding: str = 'latin-1'  # of the text inside the tournament file
    no_opponent: str = '00'
    schemas: SchemaNames = field(default_factory=SchemaNames)
    labels: Labels = field(default_factory=Labels)
