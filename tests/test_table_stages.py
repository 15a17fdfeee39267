import pytest

from kananorm.api import make_transliterator
from kananorm.errors import TransliterationConfigError
from kananorm.stages.circled_or_squared import circled_or_squared_table
from kananorm.stages.combined import combined_table
from kananorm.stages.hyphens import MAPPINGS, HyphensStage
from kananorm.stages.kanji_old_new import kanji_characters, kanji_old_new_table
from kananorm.stages.radicals import radicals_table
from kananorm.stages.spaces import spaces_table


def _run(name, text, **options):
    return make_transliterator([(name, options)])(text)


def test_spaces():
    assert _run('spaces', 'a\u3000b\u00a0c\u2003d') == 'a b c d'
    assert _run('spaces', 'a\ufeffb') == 'ab'
    assert spaces_table()['\u3000'] == ' '


def test_ideographic_annotations():
    assert _run('ideographic-annotations', '㆒㆓㆖㆟') == '一二上人'


def test_roman_numerals():
    assert _run('roman-numerals', 'Ⅻ ⅻ Ⅳ ⅿ') == 'XII xii IV m'


def test_radicals():
    assert _run('radicals', '⼀⼈⽇') == '一人日'
    assert len(radicals_table()) > 200


def test_mathematical_alphanumerics():
    assert _run('mathematical-alphanumerics', '𝐇𝐞𝐥𝐥𝐨 𝟏𝟐') == 'Hello 12'
    assert _run('mathematical-alphanumerics', 'ℝ') == 'R'
    # Greek stays Greek
    assert _run('mathematical-alphanumerics', '𝛼') == 'α'


def test_combined():
    assert _run('combined', '⑴⒈') == '(1)1.'
    assert _run('combined', '㍿') == '株式会社'
    assert _run('combined', '㎏') == 'kg'
    assert _run('combined', '㋀㋁㋂') == '1月2月3月'
    assert _run('combined', '㌀㌁㌂') == 'アパートアルファアンペア'
    assert _run('combined', '㍸㍹㍺') == 'dm2dm3IU'
    assert '①' not in combined_table()


@pytest.mark.parametrize(
    'text, expected',
    [
        ('␀', 'NUL'),
        ('␈', 'BS'),
        ('␉', 'HT'),
        ('␍', 'CR'),
        ('␠', 'SP'),
        ('␡', 'DEL'),
        ('␤', 'NL'),
        ('␀␁␂␃␄', 'NULSOHSTXETXEOT'),
        ('␉⑴␠⒈', 'HT(1)SP1.'),
        ('Hello ⑴ World ␉', 'Hello (1) World HT'),
    ],
)
def test_combined_control_pictures(text, expected):
    assert _run('combined', text) == expected


def test_combined_offsets():
    transliterate = make_transliterator(['combined', 'spaces'])
    assert transliterate('㍻\u3000') == '平成 '


@pytest.mark.parametrize(
    'text, expected',
    [
        ('①', '(1)'),
        ('⑳', '(20)'),
        ('⓪', '(0)'),
        ('㊱㊲㊳', '(36)(37)(38)'),
        ('㊿', '(50)'),
        ('Ⓐ', '(A)'),
        ('ⓐ', '(a)'),
        ('㊤', '(上)'),
        ('㋐', '(ア)'),
        ('㋾', '(ヲ)'),
        ('❶', '(1)'),
        ('🄴🅂', '[E][S]'),
        ('🆂🅾🆂', '[S][O][S]'),
        ('①🅰②🅱', '(1)[A](2)[B]'),
        ('\U0001f1e6', '[A]'),
        ('\U0001f1ff', '[Z]'),
    ],
)
def test_circled(text, expected):
    assert _run('circled-or-squared', text) == expected


def test_squared_emojis_need_option():
    assert _run('circled-or-squared', '🅰🆘') == '[A]🆘'
    assert _run('circled-or-squared', '🅰🆘', include_emojis=True) == '[A][SOS]'
    assert _run('circled-or-squared', '🄰') == '[A]'


def test_circled_templates():
    templates = {'circle': '〔?〕', 'square': '【?】'}
    assert _run('circled-or-squared', '①🅰㊀', templates=templates) == '〔1〕【A】〔一〕'
    # a partial mapping keeps the other default
    assert _run('circled-or-squared', '①🅰', templates={'circle': '<?>'}) == '<1>[A]'


def test_circled_rejects_unknown_template():
    with pytest.raises(TransliterationConfigError, match='unknown template names'):
        make_transliterator([('circled-or-squared', {'templates': {'diamond': '<?>'}})])


def test_emoji_tables_are_separate():
    assert set(circled_or_squared_table(False)) < set(circled_or_squared_table(True))


def test_hyphens_default_precedence():
    assert _run('hyphens', 'a-b—c～d') == 'a−b—c〜d'


def test_hyphens_precedence_order():
    assert _run('hyphens', '—ー', precedence=['ascii']) == '--'
    assert _run('hyphens', '・', precedence=['ascii']) == '・'
    assert _run('hyphens', '・', precedence=['ascii', 'jisx0201']) == '･'
    assert _run('hyphens', '～', precedence=['jisx0208_90_windows', 'jisx0201']) == '～'
    assert _run('hyphens', 'ｰ', precedence=['jisx0201']) == 'ｰ'


def test_hyphens_rejects_bad_precedence():
    with pytest.raises(TransliterationConfigError, match='unknown mapping columns'):
        HyphensStage(precedence=['ebcdic'])
    with pytest.raises(TransliterationConfigError, match='list'):
        HyphensStage(precedence='ascii')


def test_hyphen_records_have_every_column():
    assert all(len(record) == 5 for record in MAPPINGS.values())


def test_kanji_old_new_needs_selector():
    assert _run('kanji-old-new', '亞\U000e0100') == '亜\U000e0100'
    assert _run('kanji-old-new', '亞') == '亞'
    assert kanji_old_new_table()['舊\U000e0100'] == '旧\U000e0100'


def test_kanji_characters_are_unique():
    chars = kanji_characters()
    assert len(chars) == len(set(chars))
    assert '亞' in chars and '亜' in chars
