'''
# Layout of the repeated records

After the general data the file contains blocks of fixed size records whose
number depends on values read from the general data:

  .----------------------------------------------.
  | general data                                 |
  | ...                                          |
  | player fixtures   (rounds x participants)    |  <- base offset
  | team fixtures     (rounds x teams)           |
  | player index cards (participants)            |
  | team index cards   (teams)                   |
  '----------------------------------------------'

The base offset and the length of an index card depend on the version of the
program that wrote the file: see FORMAT_REGIMES.

The fixtures are stored one participant after the other, each one with all
its rounds: the i-th fixture belongs to the participant i // rounds for the
round i % rounds + 1.
'''
import logging
from typing import Iterator, NamedTuple, Optional, Sequence, Tuple

from .enum import RecordKind
from .exceptions import FormatException


FIXTURE_LENGTH = 19  # = 0x13


class FormatRegime(NamedTuple):
    min_version: int
    base_offset: int
    index_length: int


# from the most recent version; the first matching row wins
FORMAT_REGIMES: Tuple[FormatRegime, ...] = (
    # team tournaments with additional team data
    FormatRegime(min_version=800, base_offset=13384, index_length=655),  # 0x3448, 0x28F
    FormatRegime(min_version=0, base_offset=3894, index_length=292),     # 0xF36, 0x124
)


def regime_for(version: Optional[int], regimes: Sequence[FormatRegime] = FORMAT_REGIMES) -> FormatRegime:
    version = version if version is not None else 0
    for regime in sorted(regimes, key=lambda _: _.min_version, reverse=True):
        if version >= regime.min_version:
            return regime

    raise FormatException(f'no layout known for version {version}')


def _as_int(label, value) -> int:
    try:
        return int(value)
    except (TypeError, ValueError):
        raise FormatException(f'header field \'{label}\' has not a numeric value: {value!r}')


class HeaderFields(object):
    '''The values of the general data needed to find the records.'''

    def __init__(self, participants=0, teams=0, max_rounds=0, team_tournament=False, version=None):
        self.participants = participants
        self.teams = teams
        self.max_rounds = max_rounds
        self.team_tournament = team_tournament
        self.version = version

    def __repr__(self):
        return '<%s(participants=%d,teams=%d,max_rounds=%d,team_tournament=%s,version=%s)>' % (
            self.__class__.__name__,
            self.participants,
            self.teams,
            self.max_rounds,
            self.team_tournament,
            self.version,
        )

    def __eq__(self, other):
        if not isinstance(other, HeaderFields):
            return NotImplemented

        return vars(self) == vars(other)

    @property
    def version_tag(self) -> Optional[str]:
        '''The version as used to look up the structure files'''
        return str(self.version) if self.version is not None else None

    @classmethod
    def from_record(cls, record, labels) -> 'HeaderFields':
        '''Build from the decoded general data: a value defined as constant
        in the structure file takes the precedence over a field with the same label.'''
        def lookup(label, default=None):
            if label in record.constants:
                return record.constants[label]
            return record.fields.get(label, default)

        version = lookup(labels.version)

        return cls(
            participants=_as_int(labels.participants, lookup(labels.participants, 0)),
            teams=_as_int(labels.teams, lookup(labels.teams, 0)),
            max_rounds=_as_int(labels.max_rounds, lookup(labels.max_rounds, 0)),
            team_tournament=bool(lookup(labels.team_tournament, False)),
            version=_as_int(labels.version, version) if version is not None else None,
        )


class Block(NamedTuple):
    start: int
    record_length: int
    count: int

    @property
    def end(self) -> int:
        return self.start + self.record_length * self.count


class LayoutPlanner(object):

    def __init__(self, header: HeaderFields, regimes: Sequence[FormatRegime] = FORMAT_REGIMES,
                 fixture_length=FIXTURE_LENGTH):
        self.logger = logging.getLogger(__name__)
        self.header = header
        self.regime = regime_for(header.version, regimes)
        self.fixture_length = fixture_length

    def _player_fixtures(self) -> Block:
        h = self.header
        return Block(self.regime.base_offset, self.fixture_length, h.max_rounds * h.participants)

    def _team_fixtures(self) -> Block:
        # the player fixtures are always stored first
        h = self.header
        start = self._player_fixtures().end
        return Block(start, self.fixture_length, h.max_rounds * h.teams)

    def _players(self) -> Block:
        h = self.header
        start = (self.regime.base_offset
                 + h.participants * h.max_rounds * self.fixture_length
                 + h.teams * h.max_rounds * self.fixture_length)
        return Block(start, self.regime.index_length, h.participants)

    def _teams(self) -> Block:
        start = self._players().end
        return Block(start, self.regime.index_length, self.header.teams)

    def block(self, kind: RecordKind) -> Block:
        kind = RecordKind(kind)
        method = getattr(self, '_%s' % kind.value)
        block = method()
        self.logger.debug(f'block {kind.value} at 0x{block.start:x}: {block.count} x 0x{block.record_length:x}')

        return block

    def offsets(self, kind: RecordKind) -> Iterator[int]:
        block = self.block(kind)
        for idx in range(block.count):
            yield block.start + idx * block.record_length


def iter_fixture_slots(max_rounds: int, count: int) -> Iterator[Tuple[int, int, int]]:
    '''Yield (slot, participant index, round) for each fixture stored in the file.

    The participant index advances every time the round wraps back to one.'''
    index = -1
    round_ = 1
    for slot in range(max_rounds * count):
        if round_ == 1:
            index += 1

        yield slot, index, round_

        # when reaching the maximum rounds, start over again
        round_ = 1 if round_ == max_rounds else round_ + 1
