"""Tests for composing documents into Python objects."""

import io
import math
import re

import pytest
import yamlite as yl


class TestResolver:
    """Implicit typing of plain scalar text."""

    @pytest.mark.parametrize('text, expected', [
        ('', None),
        ('~', None),
        ('null', None),
        ('NULL', None),
        ('true', True),
        ('False', False),
        ('42', 42),
        ('-7', -7),
        ('+5', 5),
        ('0o17', 15),
        ('0x1F', 31),
        ('1.5', 1.5),
        ('1.', 1.0),
        ('-.25', -0.25),
        ('1e3', 1000.0),
        ('.inf', float('inf')),
        ('-.Inf', float('-inf')),
    ])
    def test_typed(self, text, expected):
        value = yl.Resolver().construct_scalar(text)
        assert value == expected
        assert type(value) is type(expected)

    def test_nan(self):
        assert math.isnan(yl.Resolver().construct_scalar('.nan'))

    @pytest.mark.parametrize('text', [
        'hello', 'yes', 'no', 'on', 'nULL', 'truex', '1.2.3', '0o9', '12abc', '- x',
    ])
    def test_strings(self, text):
        assert yl.Resolver().construct_scalar(text) == text

    def test_resolve_tag(self):
        resolver = yl.Resolver()
        assert resolver.resolve('12') == 'tag:yaml.org,2002:int'
        assert resolver.resolve('1.0') == 'tag:yaml.org,2002:float'
        assert resolver.resolve('text') == 'tag:yaml.org,2002:str'

    def test_subclass_resolvers_are_separate(self):
        class YesResolver(yl.Resolver):
            pass

        YesResolver.add_implicit_resolver(
            'tag:example.com,2024:yes', re.compile(r'^(?:yes|no)$'), ['y', 'n'],
            lambda value: value == 'yes')

        assert YesResolver().construct_scalar('yes') is True
        assert YesResolver().construct_scalar('no') is False
        assert YesResolver().construct_scalar('null') is None
        assert yl.Resolver().construct_scalar('yes') == 'yes'

    def test_composer_with_custom_resolver(self):
        class YesResolver(yl.Resolver):
            pass

        YesResolver.add_implicit_resolver(
            'tag:example.com,2024:yes', re.compile(r'^yes$'), ['y'], lambda value: True)

        composer = yl.Composer(resolver=YesResolver())
        assert yl.parse('a: yes\n', composer)
        assert composer.document == {'a': True}


class TestLoads:
    """Documents to objects."""

    def test_empty(self):
        assert yl.loads('') is None
        assert yl.loads('# only a comment\n') is None

    def test_root_scalar(self):
        assert yl.loads('hello\n') == 'hello'
        assert yl.loads('42') == 42

    def test_typed_values(self):
        text = ('i: 42\n'
                'n: -7\n'
                'h: 0x1F\n'
                'f: 1.5\n'
                'e: 1e3\n'
                't: true\n'
                'z: ~\n'
                's: hello world\n'
                'v: 1.2.3\n'
                'q: \'123\'\n')
        assert yl.loads(text) == {
            'i': 42, 'n': -7, 'h': 31, 'f': 1.5, 'e': 1000.0, 't': True,
            'z': None, 's': 'hello world', 'v': '1.2.3', 'q': '123',
        }

    def test_quoted_scalars_stay_strings(self):
        text = 'a: \'123\'\nb: "true"\nc: \'null\'\nd: \'\'\ne: [\'1\', 2]\n'
        assert yl.loads(text) == {'a': '123', 'b': 'true', 'c': 'null', 'd': '', 'e': ['1', 2]}

    def test_quoted_values_are_plain_str(self):
        document = yl.loads("a: 'x'\nb: [\"y\"]\n")
        assert type(document['a']) is str
        assert type(document['b'][0]) is str

    def test_no_resolve(self):
        assert yl.loads('a: 1\nb: true\nc:\n', resolve=False) == \
            {'a': '1', 'b': 'true', 'c': 'null'}

    def test_missing_value_is_null(self):
        assert yl.loads('a:\nb: 1\n') == {'a': None, 'b': 1}

    def test_nested_mappings(self):
        text = ('a:\n'
                '  b:\n'
                '    c: 1\n'
                '  d: 2\n'
                'e: 3\n')
        assert yl.loads(text) == {'a': {'b': {'c': 1}, 'd': 2}, 'e': 3}

    def test_block_sequence(self):
        assert yl.loads('items:\n  - one\n  - two\nnext: 1\n') == \
            {'items': ['one', 'two'], 'next': 1}

    def test_root_sequence(self):
        assert yl.loads('- a\n- b\n') == ['a', 'b']

    def test_sequence_of_mappings(self):
        text = ('- name: a\n'
                '  v: 1\n'
                '- name: b\n'
                '  v: 2\n')
        assert yl.loads(text) == [{'name': 'a', 'v': 1}, {'name': 'b', 'v': 2}]

    def test_items_with_different_keys(self):
        """Every '- ' line starts a new item, whatever its keys."""
        assert yl.loads('- a: 1\n- b: 2\n') == [{'a': 1}, {'b': 2}]

    def test_nested_items_with_different_keys(self):
        assert yl.loads('servers:\n  - host: x\n  - port: 80\n') == \
            {'servers': [{'host': 'x'}, {'port': 80}]}

    def test_item_key_without_value(self):
        assert yl.loads('- a:\n- b: 1\n') == [{'a': None}, {'b': 1}]

    def test_items_mixing_scalars_and_mappings(self):
        assert yl.loads('- x\n- k: v\n  w: 1\n- y\n') == ['x', {'k': 'v', 'w': 1}, 'y']

    def test_item_holding_a_sequence(self):
        text = ('- name: a\n'
                '  tags:\n'
                '    - t1\n'
                '    - t2\n'
                '- name: b\n')
        assert yl.loads(text) == [{'name': 'a', 'tags': ['t1', 't2']}, {'name': 'b'}]

    def test_flow_collections(self):
        assert yl.loads('a: [1, {b: c, d: [x, y]}, "q, r"]\n') == \
            {'a': [1, {'b': 'c', 'd': ['x', 'y']}, 'q, r']}

    def test_flow_mapping_bare_entry(self):
        assert yl.loads('{a, b: 1}') == {'a': None, 'b': 1}

    def test_empty_flow_collections(self):
        assert yl.loads('a: []\nb: {}\n') == {'a': [], 'b': {}}

    def test_documents_fold_together(self):
        assert yl.loads('a: 1\n---\nb: 2\n') == {'a': 1, 'b': 2}

    def test_composer_state(self):
        composer = yl.Composer()
        assert composer.document is None
        assert yl.parse('a: 1\n', composer)
        assert composer.complete


class TestComposerErrors:
    """Event streams that do not form one tree."""

    def test_key_after_root_sequence(self):
        with pytest.raises(yl.ComposerError):
            yl.loads('- a\nb: 1\n')

    def test_two_root_scalars(self):
        with pytest.raises(yl.ComposerError):
            yl.loads('a\nb\n')

    def test_scanner_error_propagates(self):
        with pytest.raises(yl.ScannerError):
            yl.loads('a: [1, 2}\n')


class TestLoad:
    """Reading from files and streams."""

    def test_path(self, tmp_path):
        path = tmp_path / 'config.yaml'
        path.write_text('a: 1\nb: [x, y]\n')
        assert yl.load(path) == {'a': 1, 'b': ['x', 'y']}
        assert yl.load(str(path)) == {'a': 1, 'b': ['x', 'y']}

    def test_binary_stream_with_bom(self):
        assert yl.load(io.BytesIO(b'\xef\xbb\xbfname: caf\xc3\xa9\n')) == {'name': 'café'}

    def test_text_stream(self):
        assert yl.load(io.StringIO('a: b\n'), resolve=False) == {'a': 'b'}

    def test_error_names_the_file(self, tmp_path):
        path = tmp_path / 'bad.yaml'
        path.write_text('a: b\tc\n')
        with pytest.raises(yl.ScannerError) as excinfo:
            yl.load(path)
        assert excinfo.value.problem_mark.name == str(path)
        assert str(path) in str(excinfo.value)

    def test_bad_encoding(self):
        with pytest.raises(yl.YAMLError):
            yl.loads(b'a: \xff\xfe\xfa\n')

    def test_wrong_type(self):
        with pytest.raises(TypeError):
            yl.loads(42)


class TestAgainstPyYAML:
    """Documents that mean the same to yamlite and PyYAML."""

    DOCUMENTS = [
        'name: Alice\nage: 30\n',
        'tags: [a, b, c]\nempty: []\n',
        'nested:\n  x: 1.5\n  y: true\n  z: null\n',
        'items:\n  - one\n  - two\n',
        'items:\n- one\n- two\nafter: 1\n',
        'people:\n  - name: a\n    age: 1\n  - name: b\n    age: 2\n',
        'server:\n  host: localhost\n  ports: [80, 443]\n  tls: {cert: a.pem, key: b.pem}\n',
        "quoted: 'a: b'\nother: \"x, y\"\n",
        '# comment\nkey: value # trailing\n',
        'url: http://example.com/path\n',
        '- a: 1\n- b: 2\n',
        'servers:\n  - host: x\n  - port: 80\n',
        '- a:\n- b: 1\n',
        "a: '123'\nb: 'true'\nc: ''\n",
    ]

    @pytest.mark.parametrize('text', DOCUMENTS)
    def test_same_result(self, text):
        pyyaml = pytest.importorskip('yaml')
        assert yl.loads(text) == pyyaml.safe_load(text)

    @pytest.mark.parametrize('data', [
        {'name': 'Alice', 'ports': [80, 443], 'db': {'host': 'localhost', 'port': 5432}},
        {'url': 'http://example.com', 'note': "it's here", 'empty': {}},
        {'flags': [True, False, None], 'ratio': 0.5},
        {'a': '123', 'b': 'true', 'c': 'null', 'd': '', 'e': '1.5', 'f': '~'},
        {'up': float('inf'), 'down': float('-inf'), 'codes': ['1', 2, 'false']},
        {'123': 'numeric key', 'null': 'null key'},
    ])
    def test_pyyaml_reads_dumps(self, data):
        pyyaml = pytest.importorskip('yaml')
        assert pyyaml.safe_load(yl.dumps(data)) == data

    def test_pyyaml_reads_nan(self):
        pyyaml = pytest.importorskip('yaml')
        assert math.isnan(pyyaml.safe_load(yl.dumps({'x': float('nan')}))['x'])
