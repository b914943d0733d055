"""
Tests for column and table specifications.
"""
from entitymap.classifier import TypeFamily
from entitymap.schema import ColumnSpec, TableSpec, table_name_of, type_name_for


def test_column_spec_upper_cases_type():
    col = ColumnSpec('name', 'nvarchar', length=20)
    assert col.type_name == 'NVARCHAR'
    assert col.family is TypeFamily.CHARACTER
    assert ColumnSpec('blob').type_name is None
    assert ColumnSpec('blob').family is None


def test_column_spec_from_catalog(catalog_rows):
    col = ColumnSpec.from_metadata(catalog_rows[1])
    assert col.name == 'age'
    assert col.type_name == 'INTEGER'
    assert col.nullable is False
    assert col.length == 10
    assert col.scale == 0


def test_column_spec_from_other_spellings():
    col = ColumnSpec.from_metadata({'name': 'tags', 'dataTypeName': 'VARCHAR', 'nullable': True})
    assert col.type_name == 'VARCHAR'
    assert col.nullable is True

    col = ColumnSpec.from_metadata({'column_name': 'x', 'data_type_name': 'date'})
    assert (col.name, col.type_name) == ('x', 'DATE')


def test_column_spec_to_dict():
    col = ColumnSpec('score', 'DECIMAL', precision=10, scale=2)
    assert col.to_dict() == {
        'name': 'score',
        'type_name': 'DECIMAL',
        'nullable': None,
        'length': None,
        'precision': 10,
        'scale': 2,
        }
    assert repr(col) == "ColumnSpec(name='score', type_name='DECIMAL')"


def test_table_spec_from_catalog(catalog_rows):
    spec = TableSpec.from_metadata('sys_user', catalog_rows)
    assert spec.name == 'sys_user'
    assert list(spec.columns) == ['name', 'age', 'created']
    assert spec.type_name_for('created') == 'TIMESTAMP'
    assert spec.family_for('age') is TypeFamily.NUMERIC
    assert spec.type_name_for('missing') is None
    assert spec.family_for('missing') is None
    assert 'name' in spec
    assert 'missing' not in spec


def test_table_spec_from_mapping():
    spec = TableSpec('t', {'a': ColumnSpec('a', 'DATE')})
    assert spec.get('a').type_name == 'DATE'
    assert spec.get('b') is None
    assert TableSpec().columns == {}


def test_type_name_for_accepts_several_shapes(user_spec):
    """TableSpec, a columns mapping or a plain field mapping all work"""
    assert type_name_for(user_spec, 'created') == 'TIMESTAMP'
    assert type_name_for({'columns': {'f': {'dataTypeName': 'NVARCHAR'}}}, 'f') == 'NVARCHAR'
    assert type_name_for({'columns': {'f': ColumnSpec('f', 'DATE')}}, 'f') == 'DATE'
    assert type_name_for({'f': 'TIME'}, 'f') == 'TIME'
    assert type_name_for({'f': {'type_name': 'BLOB'}}, 'f') == 'BLOB'


def test_type_name_for_missing():
    """Missing specs and missing type names resolve to None"""
    assert type_name_for(None, 'f') is None
    assert type_name_for({}, 'f') is None
    assert type_name_for({'columns': {}}, 'f') is None
    assert type_name_for({'columns': {'f': {}}}, 'f') is None
    assert type_name_for({'f': None}, 'f') is None
    assert type_name_for({'f': ''}, 'f') is None


def test_table_name_of(user_spec):
    assert table_name_of(user_spec) == 'sys_user'
    assert table_name_of({'name': 'orders', 'columns': {}}) == 'orders'
    assert table_name_of({'name': ColumnSpec('name', 'NVARCHAR')}) is None
    assert table_name_of(None) is None
