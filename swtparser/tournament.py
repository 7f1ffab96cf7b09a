'''
# SwissChess tournament files

Walk the whole file: first the general data, then the index cards of teams
and players and finally the fixtures, each of them linked to the name of
the opponent.

    tournament = parse('turnier.swt')

    for player_id, rounds in tournament.player_fixtures.items():
        for round_, fixture in rounds.items():
            print(player_id, round_, fixture['Gegner_lang'])
'''
import logging
from typing import Dict, List, Optional, Tuple

from .config import Settings
from .core import AuditEntry, DecodedRecord, RecordInterpreter
from .enum import RecordKind
from .exceptions import ConfigurationException, FormatException
from .layout import HeaderFields, LayoutPlanner, iter_fixture_slots
from .schema import SchemaStore
from .streams import Stream


UNKNOWN_OPPONENT = 'UNKNOWN '

Fields = Dict[str, object]


class Tournament(object):
    '''All the data decoded from a file.

    The ids of players and teams are kept also as lists in the order
    the index cards are stored, the fixtures are attributed by position.'''

    def __init__(self, header: Fields, header_fields: HeaderFields):
        self.header = header
        self.header_fields = header_fields
        self.teams: Dict[object, Fields] = {}
        self.players: Dict[object, Fields] = {}
        self.team_ids: List[object] = []
        self.player_ids: List[object] = []
        self.team_fixtures: Dict[object, Dict[int, Fields]] = {}
        self.player_fixtures: Dict[object, Dict[int, Fields]] = {}
        self.audit: List[AuditEntry] = []

    def __repr__(self):
        return '<%s(players=%d,teams=%d,rounds=%d)>' % (
            self.__class__.__name__,
            len(self.players),
            len(self.teams),
            self.header_fields.max_rounds,
        )

    def __eq__(self, other):
        if not isinstance(other, Tournament):
            return NotImplemented

        return vars(self) == vars(other)


class TournamentAssembler(object):

    def __init__(self, settings: Optional[Settings] = None, store: Optional[SchemaStore] = None):
        self.logger = logging.getLogger(__name__)
        self.settings = settings if settings is not None else Settings()
        self.store = store if store is not None else SchemaStore(self.settings.root, self.settings.prefix)
        self.interpreter = RecordInterpreter(self.store, encoding=self.settings.encoding)

    def _schema_for(self, kind: RecordKind) -> str:
        return getattr(self.settings.schemas, kind.value)

    def _interpret(self, data, kind, idx, offset, length, version) -> DecodedRecord:
        try:
            return self.interpreter.interpret(data, self._schema_for(kind), offset, length, version=version)
        except FormatException as e:
            e.chain.append(f'{kind.value}[{idx}]')
            raise

    def records(self, data: bytes, planner: LayoutPlanner, kind: RecordKind) -> Tuple[Dict, List, List[AuditEntry]]:
        '''Parses the index cards of players or teams: returns the cards by id,
        the ids in the order they are stored and the audit trail.'''
        id_label = self.settings.labels.team_id if kind == RecordKind.TEAMS else self.settings.labels.player_id
        block = planner.block(kind)
        version = planner.header.version_tag

        records = {}
        ids = []
        audit = []
        for idx, offset in enumerate(planner.offsets(kind)):
            record = self._interpret(data, kind, idx, offset, block.record_length, version)
            audit.extend(record.audit)

            if id_label not in record:
                raise ConfigurationException(
                    f'structure has no field \'{id_label}\'', chain=[self._schema_for(kind)])

            record_id = record[id_label]
            ids.append(record_id)
            if record_id in records:
                self.logger.warning(f'duplicate id {record_id!r} in {kind.value} at offset 0x{offset:x}, keeping the first one')
                continue

            records[record_id] = record.fields

        return records, ids, audit

    def opponent_name(self, opponent, roster: Dict, name_label: str) -> str:
        if opponent in roster:
            return roster[opponent].get(name_label, '')
        if opponent != self.settings.no_opponent:
            self.logger.warning(f'opponent {opponent!r} not found')
            return UNKNOWN_OPPONENT + str(opponent)

        return ''  # bye or not played yet

    def fixtures(self, data: bytes, planner: LayoutPlanner, kind: RecordKind,
                 ids: List, roster: Dict) -> Tuple[Dict, List[AuditEntry]]:
        '''Parses fixtures for players or teams: returns [id][round] = data'''
        labels = self.settings.labels
        name_label = labels.team_name if kind == RecordKind.TEAM_FIXTURES else labels.player_name
        block = planner.block(kind)
        version = planner.header.version_tag

        # position of the index card kept in the roster for each id
        first = {}
        for index, record_id in enumerate(ids):
            first.setdefault(record_id, index)

        fixtures: Dict[object, Dict[int, Fields]] = {}
        audit = []
        for slot, index, round_ in iter_fixture_slots(planner.header.max_rounds, len(ids)):
            offset = block.start + slot * block.record_length
            record = self._interpret(data, kind, slot, offset, block.record_length, version)
            audit.extend(record.audit)

            if labels.opponent not in record:
                raise ConfigurationException(
                    f'structure has no field \'{labels.opponent}\'', chain=[self._schema_for(kind)])

            record_id = ids[index]
            if first[record_id] != index:
                self.logger.warning(f'skipping round {round_} of duplicate id {record_id!r} in {kind.value}')
                continue

            record.fields[labels.opponent_name] = self.opponent_name(
                record[labels.opponent], roster, name_label)

            fixtures.setdefault(record_id, {})[round_] = record.fields

        return fixtures, audit

    def assemble(self, data: bytes) -> Tournament:
        data = bytes(data)
        general = self.interpreter.interpret(data, self.settings.schemas.header)
        header = HeaderFields.from_record(general, self.settings.labels)
        self.logger.debug(f'general data: {header!r}')

        planner = LayoutPlanner(header)

        tournament = Tournament(general.fields, header)
        tournament.audit.extend(general.audit)

        if header.team_tournament:
            tournament.teams, tournament.team_ids, audit = self.records(data, planner, RecordKind.TEAMS)
            tournament.audit.extend(audit)

        tournament.players, tournament.player_ids, audit = self.records(data, planner, RecordKind.PLAYERS)
        tournament.audit.extend(audit)

        if header.team_tournament:
            tournament.team_fixtures, audit = self.fixtures(
                data, planner, RecordKind.TEAM_FIXTURES, tournament.team_ids, tournament.teams)
            tournament.audit.extend(audit)

        tournament.player_fixtures, audit = self.fixtures(
            data, planner, RecordKind.PLAYER_FIXTURES, tournament.player_ids, tournament.players)
        tournament.audit.extend(audit)

        return tournament


def parse(obj, settings: Optional[Settings] = None, store: Optional[SchemaStore] = None) -> Tournament:
    '''Parses a SwissChess file (path or raw bytes) and returns its data.'''
    stream = Stream(obj)

    return TournamentAssembler(settings, store).assemble(stream.data)
