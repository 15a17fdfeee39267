import json
import threading
from unittest.mock import patch

import pytest

from kananorm.api import make_transliterator
from kananorm.errors import IvsSvsDataError, TransliterationConfigError
from kananorm.stages import ivs_svs_base
from kananorm.stages.ivs_svs_base import (
    IvsSvsBaseStage,
    encode_records,
    load_tables,
    parse_tables,
    reset_tables,
    strip_selectors,
)

IVS = '\U000e0100'
IVS2 = '\U000e0101'
SVS = '\ufe00'


@pytest.fixture
def fresh_tables():
    reset_tables()
    yield
    reset_tables()


def _stage(**options):
    return make_transliterator([('ivs-svs-base', options)])


def test_round_trip():
    expand = _stage(mode='ivs-or-svs', charset='unijis_2004')
    fold = _stage(mode='base', charset='unijis_2004')
    expanded = expand('逸為')
    assert expanded == '逸' + IVS + '為' + IVS
    assert fold(expanded) == '逸為'


def test_unknown_characters_pass_through():
    assert _stage(mode='ivs-or-svs')('abc、あ') == 'abc、あ'
    assert _stage()('abc、あ') == 'abc、あ'


def test_charset_selects_base():
    assert _stage(mode='ivs-or-svs', charset='unijis_90')('辻') == '辻' + IVS
    assert _stage(mode='ivs-or-svs', charset='unijis_2004')('辻') == '辻' + IVS2
    assert _stage(charset='unijis_90')('辻' + IVS) == '辻'
    assert _stage(charset='unijis_2004')('辻' + IVS2) == '辻'
    # no unijis_2004 base for this sequence
    assert _stage(charset='unijis_2004')('辻' + IVS) == '辻' + IVS


def test_prefer_svs():
    assert _stage(mode='ivs-or-svs')('漢') == '漢' + IVS
    assert _stage(mode='ivs-or-svs', prefer_svs=True)('漢') == '漢' + SVS
    # nothing to prefer
    assert _stage(mode='ivs-or-svs', prefer_svs=True)('亞') == '亞' + IVS
    assert _stage()('漢' + SVS) == '漢'


def test_drop_selectors_altogether():
    unknown = 'あ' + IVS2
    assert _stage()(unknown) == unknown
    assert _stage(drop_selectors_altogether=True)(unknown) == 'あ'
    assert _stage(drop_selectors_altogether=True)('葛' + IVS) == '葛'


def test_invalid_options():
    with pytest.raises(TransliterationConfigError, match='mode'):
        IvsSvsBaseStage(mode='svs')
    with pytest.raises(TransliterationConfigError, match='charset'):
        IvsSvsBaseStage(charset='unijis_83')


def test_tables_loaded_once():
    assert load_tables() is load_tables()
    assert IvsSvsBaseStage().tables is IvsSvsBaseStage(mode='ivs-or-svs').tables


def test_concurrent_first_load_parses_once(fresh_tables):
    barrier = threading.Barrier(16)
    results = []

    def load():
        barrier.wait()
        results.append(load_tables())

    with patch('kananorm.stages.ivs_svs_base.parse_tables', wraps=parse_tables) as parse:
        threads = [threading.Thread(target=load) for _ in range(16)]
        for thread in threads:
            thread.start()
        for thread in threads:
            thread.join()

    assert parse.call_count == 1
    assert len(results) == 16
    assert all(tables is results[0] for tables in results)


def test_missing_data_file(monkeypatch, tmp_path, fresh_tables):
    monkeypatch.setenv('KANANORM_IVS_SVS_DATA', str(tmp_path / 'missing.data'))
    with pytest.raises(IvsSvsDataError, match='not readable'):
        IvsSvsBaseStage()


def test_corrupt_data_file(monkeypatch, tmp_path, fresh_tables):
    path = tmp_path / 'broken.data'
    path.write_bytes(b'\x00\x00\x00\x02' + b'\x00' * 24)
    monkeypatch.setenv('KANANORM_IVS_SVS_DATA', str(path))
    with pytest.raises(IvsSvsDataError, match='size mismatch'):
        IvsSvsBaseStage()


def test_data_error_is_config_error(monkeypatch, tmp_path, fresh_tables):
    monkeypatch.setenv('KANANORM_IVS_SVS_DATA', str(tmp_path / 'missing.data'))
    with pytest.raises(TransliterationConfigError):
        make_transliterator(['ivs-svs-base'])


def test_custom_data_file(monkeypatch, tmp_path, fresh_tables):
    path = tmp_path / 'custom.data'
    path.write_bytes(encode_records([
        {'ivs': ['U+845B', 'U+E0100'], 'svs': None, 'base90': 'U+845B', 'base2004': 'U+845B'},
    ]))
    monkeypatch.setenv('KANANORM_IVS_SVS_DATA', str(path))
    assert ivs_svs_base.data_path() == path
    assert _stage(mode='ivs-or-svs')('葛飾') == '葛' + IVS + '飾'


def test_parse_tables_truncated():
    with pytest.raises(IvsSvsDataError, match='truncated'):
        parse_tables(b'\x00\x00')


def test_encode_and_parse_records():
    tables = parse_tables(encode_records([
        {'ivs': ['U+8FBB', 'U+E0100'], 'svs': None, 'base90': 'U+8FBB', 'base2004': None},
        {'ivs': ['U+6F22', 'U+E0100'], 'svs': ['U+6F22', 'U+FE00'],
         'base90': 'U+6F22', 'base2004': 'U+6F22'},
    ]))
    assert set(tables.base_to_variants['unijis_90']) == {'辻', '漢'}
    assert set(tables.base_to_variants['unijis_2004']) == {'漢'}
    assert tables.variant_to_bases['漢' + SVS].unijis_2004 == '漢'
    assert tables.variant_to_bases['辻' + IVS].unijis_2004 is None


def test_encode_rejects_long_sequence():
    with pytest.raises(ValueError):
        encode_records([{'ivs': ['U+8FBB', 'U+E0100', 'U+E0101']}])


def test_strip_selectors():
    assert strip_selectors('葛' + IVS + 'あ' + SVS) == '葛あ'


def test_build_script_reproduces_bundled_data(tmp_path, capsys):
    from scripts.build_ivs_svs_data import DATA_DIR, main

    output = tmp_path / 'out.data'
    main([str(DATA_DIR / 'ivs_svs_base.json'), str(output)])

    assert output.read_bytes() == (DATA_DIR / 'ivs_svs_base.data').read_bytes()
    assert 'records: 530' in capsys.readouterr().out


def test_build_script_requires_every_old_new_kanji(tmp_path):
    from scripts.build_ivs_svs_data import DATA_DIR, main

    records = json.loads((DATA_DIR / 'ivs_svs_base.json').read_text(encoding='utf-8'))
    source = tmp_path / 'source.json'
    source.write_text(
        json.dumps([r for r in records if r['base2004'] != 'U+4E9E']), encoding='utf-8'
    )
    output = tmp_path / 'out.data'

    with pytest.raises(SystemExit, match='亞'):
        main([str(source), str(output)])
    assert not output.exists()
