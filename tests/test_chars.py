from kananorm.chars import CodePointUnit, build_units, byte_len, flatten, segments


def test_build_units_empty_is_single_sentinel():
    units = build_units('')
    assert len(units) == 1
    assert units[0].is_sentinel()
    assert units[0].offset == 0
    assert flatten(units) == ''


def test_build_units_offsets_are_utf8_lengths():
    units = build_units('aあ𠀋')
    assert [u.text for u in units] == ['a', 'あ', '𠀋', '']
    assert [u.offset for u in units] == [0, 1, 4, 8]


def test_variation_selector_merges_with_base():
    text = '葛\U000E0100城\ufe00x'
    units = build_units(text)
    assert [u.text for u in units] == ['葛\U000E0100', '城\ufe00', 'x', '']
    assert units[-1].offset == byte_len(text)


def test_leading_variation_selector_stays_alone():
    units = build_units('\ufe00a')
    assert [u.text for u in units] == ['\ufe00', 'a', '']


def test_flatten_round_trips_input():
    for text in ['', 'hello', 'ｶﾞｷﾞ　テスト', '辻\U000E0101です', '🅰🆘']:
        assert flatten(build_units(text)) == text


def test_flatten_skips_inner_sentinels():
    units = [CodePointUnit('a', 0), CodePointUnit('', 1), CodePointUnit('b', 1)]
    assert flatten(units) == 'ab'


def test_segments_keeps_selector_with_base():
    assert list(segments('亜\U000E0100b')) == ['亜\U000E0100', 'b']


def test_is_transliterated_follows_origin_chain():
    original = CodePointUnit('-', 0)
    moved = original.with_offset(3)
    assert not moved.is_transliterated()

    replaced = moved.derive('ー', 3)
    assert replaced.is_transliterated()
    assert replaced.with_offset(5).with_offset(7).is_transliterated()


def test_derived_unit_keeps_origin():
    unit = CodePointUnit('か', 0)
    composed = unit.derive('が', 0)
    assert composed.origin is unit
    assert composed.origin.origin is None
