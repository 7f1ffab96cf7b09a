import threading

import pytest

from swtparser.enum import SchemaKind, TypeTag
from swtparser.exceptions import (
    ConfigurationException,
    SchemaKindException,
    SchemaNotFoundException,
    SchemaSyntaxException,
)
from swtparser.schema import (
    FieldSchema,
    SchemaStore,
    candidate_dirs,
    is_constant_label,
    parse_schema,
    selection_name,
)


def test_parse_fields():
    text = (
        '# comment\tthat\twould be invalid\n'
        '00\t01\tint\tTeilnehmerzahl\n'
        '02\t\tboo\tMannschaftsturnier\n'
        '03\t04\tbin\n'
        '05\t\tasc\t\n'
        '\n'
        '06\t06\tbin\n'
    )
    schema = parse_schema(text, SchemaKind.FIELDS)

    assert schema == (
        FieldSchema(0x00, 0x01, TypeTag.INT, 'Teilnehmerzahl'),
        FieldSchema(0x02, None, TypeTag.BOO, 'Mannschaftsturnier'),
        FieldSchema(0x03, 0x04, TypeTag.BIN, 'BIN 03-04'),
        FieldSchema(0x05, None, TypeTag.ASC, 'BIN 05'),
        FieldSchema(0x06, 0x06, TypeTag.BIN, 'BIN 06'),
    )


def test_field_without_end_is_one_byte():
    field, = parse_schema('1A\t\tint\tRunde\n', SchemaKind.FIELDS)

    assert field.last == 0x1a
    assert field.size == 1


def test_constant_label():
    field, = parse_schema('06\t07\tinb\t_FILEVERSION_\n', SchemaKind.FIELDS)

    assert field.label == 'FILEVERSION'
    assert field.constant

    assert is_constant_label('_MAX_ROUNDS_')
    assert not is_constant_label('_Runden_')
    assert not is_constant_label('FILEVERSION')
    assert not is_constant_label('__')


@pytest.mark.parametrize('line', [
    '00\tint\n',               # too few columns
    '00\t01\tint\tlabel\textra\n',
    '0G\t\tint\tlabel\n',      # not hexadecimal
    '05\t01\tint\tlabel\n',    # ends before start
    '00\t\tflt\tlabel\n',      # unknown type
])
def test_parse_fields_invalid(line):
    with pytest.raises(SchemaSyntaxException) as excinfo:
        parse_schema('# header\n' + line, SchemaKind.FIELDS, path='broken.txt')

    assert excinfo.value.lineno == 2
    assert isinstance(excinfo.value, ConfigurationException)


def test_parse_replacements():
    schema = parse_schema('# colors\n01\tWeiss\n02\tSchwarz\n03\n', SchemaKind.REPLACEMENTS)

    assert dict(schema) == {'01': 'Weiss', '02': 'Schwarz', '03': ''}

    # shared between records, so it must not change
    with pytest.raises(TypeError):
        schema['04'] = 'Blau'

    with pytest.raises(SchemaSyntaxException):
        parse_schema('01\tWeiss\tSchwarz\n', SchemaKind.REPLACEMENTS)


def test_selection_name():
    assert selection_name('Farbe der Auslosung') == 'farbe-selection'
    assert selection_name('Geschlecht') == 'geschlecht-selection'


def test_candidate_dirs():
    assert candidate_dirs('structure', '801') == [
        'structure-v801',
        'structure-v80x',
        'structure-v8xx',
        'structure',
    ]
    assert candidate_dirs('structure') == ['structure']


def test_resolution_most_specific_first(tmp_path):
    for directory in ('structure', 'structure-v8xx', 'structure-v801'):
        (tmp_path / directory).mkdir()
        (tmp_path / directory / 'spieler.txt').write_text(f'00\t\tint\t{directory}\n')

    store = SchemaStore(tmp_path)

    assert store.load('spieler', version='801')[0].label == 'structure-v801'
    assert store.load('spieler', version='805')[0].label == 'structure-v8xx'
    assert store.load('spieler', version='700')[0].label == 'structure'
    assert store.load('spieler')[0].label == 'structure'


def test_missing_schema(tmp_path):
    store = SchemaStore(tmp_path)

    with pytest.raises(SchemaNotFoundException) as excinfo:
        store.load('spieler', version='80')

    assert [_.parent.name for _ in excinfo.value.tried] == ['structure-v80', 'structure-v8x', 'structure']


def test_invalid_kind(store):
    with pytest.raises(SchemaKindException):
        store.load('spieler', 'columns')


def test_cache_does_not_read_again(tmp_path):
    (tmp_path / 'structure').mkdir()
    path = tmp_path / 'structure' / 'spieler.txt'
    path.write_text('00\t1F\tasc\tSpielername\n')

    store = SchemaStore(tmp_path)
    schema = store.load('spieler')

    path.unlink()

    assert store.load('spieler') is schema
    assert store.load('spieler', 'fields') is schema

    store.clear()
    with pytest.raises(SchemaNotFoundException):
        store.load('spieler')


def test_cache_first_writer_wins(store, monkeypatch):
    calls = []

    def counting_parse_schema(*args, **kwargs):
        calls.append(args)
        return parse_schema(*args, **kwargs)

    monkeypatch.setattr('swtparser.schema.parse_schema', counting_parse_schema)

    barrier = threading.Barrier(8)
    results = []

    def load():
        barrier.wait()
        results.append(store.load('spieler'))

    threads = [threading.Thread(target=load) for _ in range(8)]
    for thread in threads:
        thread.start()
    for thread in threads:
        thread.join()

    assert len(results) == 8
    assert all(_ is results[0] for _ in results)
    assert len(calls) == 1


def test_latin1_structure_file(tmp_path):
    (tmp_path / 'structure').mkdir()
    (tmp_path / 'structure' / 'verein.txt').write_bytes('00\t\tint\tVereinsgr\xf6\xdfe\n'.encode('latin-1'))

    field, = SchemaStore(tmp_path).load('verein')

    assert field.label == 'Vereinsgröße'
