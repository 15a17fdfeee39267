import pytest

from kananorm.api import make_transliterator
from kananorm.chars import build_units
from kananorm.stages.jisx0201_and_alike import Jisx0201AndAlikeStage, mapping_tables


def _forward(**options):
    return make_transliterator([('jisx0201-and-alike', options)])


def _reverse(**options):
    options['fullwidth_to_halfwidth'] = False
    return make_transliterator([('jisx0201-and-alike', options)])


@pytest.mark.parametrize(
    'text, expected',
    [
        ('ＡＢＣ１２３', 'ABC123'),
        ('　', ' '),
        ('（テスト）', '(ﾃｽﾄ)'),
        ('ガッコウ', 'ｶﾞｯｺｳ'),
        ('パン。', 'ﾊﾟﾝ｡'),
        ('「ー」', '｢ｰ｣'),
        ('漢字', '漢字'),
        ('ひらがな', 'ひらがな'),
    ],
)
def test_to_halfwidth(text, expected):
    assert _forward()(text) == expected


def test_to_halfwidth_gl_only():
    assert _forward(convert_gr=False)('ＡＢＣ　カナ') == 'ABC カナ'


def test_to_halfwidth_gr_only():
    assert _forward(convert_gl=False)('ＡＢＣ　カナ') == 'ＡＢＣ　ｶﾅ'


def test_to_halfwidth_hiraganas():
    assert _forward(convert_hiraganas=True)('ひらがな') == 'ﾋﾗｶﾞﾅ'
    assert _forward(convert_hiraganas=True)('ちょっと') == 'ﾁｮｯﾄ'


def test_to_halfwidth_overrides():
    assert _forward()('￥～〜') == '\\~~'
    assert _forward(u00a5_as_yen_sign=True)('￥') == '¥'
    assert _forward(u007e_as_wave_dash=False)('〜') == '〜'
    assert _forward(u005c_as_backslash=True, u005c_as_yen_sign=False)('＼￥') == '\\￥'


def test_to_halfwidth_unsafe_specials():
    assert _forward()('゠') == '='
    assert _forward(convert_unsafe_specials=False)('゠') == '゠'


@pytest.mark.parametrize(
    'text, expected',
    [
        ('ABC123', 'ＡＢＣ１２３'),
        (' ', '　'),
        ('ｶﾞｯｺｳ', 'ガッコウ'),
        ('ﾊﾟﾝ', 'パン'),
        ('ｶ', 'カ'),
        ('ﾞ', '゛'),
        ('ｱﾞ', 'ア゛'),
        ('\\', '￥'),
        ('~', '～'),
    ],
)
def test_to_fullwidth(text, expected):
    assert _reverse()(text) == expected


def test_to_fullwidth_without_combining():
    assert _reverse(combine_voiced_sound_marks=False)('ｶﾞ') == 'カ゛'


def test_to_fullwidth_backslash():
    assert _reverse(u005c_as_backslash=True)('\\') == '＼'


def test_to_fullwidth_tilde_variants():
    assert _reverse(u007e_as_wave_dash=True)('~') == '〜'


def test_reverse_offsets_with_pending_unit():
    stage = Jisx0201AndAlikeStage(fullwidth_to_halfwidth=False)
    out = list(stage(build_units('ｶﾞa')))
    assert [(u.text, u.offset) for u in out] == [('ガ', 0), ('ａ', 3), ('', 6)]


def test_pending_unit_flushed_without_sentinel():
    stage = Jisx0201AndAlikeStage(fullwidth_to_halfwidth=False)
    units = build_units('ｶ')[:-1]
    assert [u.text for u in stage(units)] == ['カ']


def test_identical_options_share_tables():
    first = Jisx0201AndAlikeStage(convert_gr=False)
    second = Jisx0201AndAlikeStage(convert_gr=False)
    assert first.tables is second.tables
    assert first.tables is mapping_tables(first.key)
    assert Jisx0201AndAlikeStage().tables is not first.tables
