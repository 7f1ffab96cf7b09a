from enum import Enum


class TypeTag(Enum):
    '''The type of a field as written in the third column of a structure file'''
    ASC = 'asc'  # text terminated by a null byte
    BIN = 'bin'  # hex dump
    B2A = 'b2a'  # hex dump read as a number
    INT = 'int'  # little endian
    INB = 'inb'  # big endian
    BOO = 'boo'
    SEL = 'sel'  # lookup in a "-selection" structure file


class SchemaKind(Enum):
    '''Which kind of content a structure file carries'''
    FIELDS       = 'fields'
    REPLACEMENTS = 'replacements'


class RecordKind(Enum):
    '''The blocks of repeated records following the header'''
    PLAYERS         = 'players'
    TEAMS           = 'teams'
    PLAYER_FIXTURES = 'player_fixtures'
    TEAM_FIXTURES   = 'team_fixtures'
