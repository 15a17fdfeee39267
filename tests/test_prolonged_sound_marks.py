import pytest

from kananorm.api import make_transliterator
from kananorm.chars import CodePointUnit, build_units
from kananorm.stages.prolonged_sound_marks import (
    ALPHABET,
    DIGIT,
    HALFWIDTH,
    ProlongedSoundMarksStage,
    char_type,
    is_alnum,
)


def _transliterator(**options):
    return make_transliterator([('prolonged-sound-marks', options)])


@pytest.mark.parametrize(
    'text, expected',
    [
        ('あ-', 'あー'),
        ('ア--', 'アーー'),
        ('カ－ド', 'カード'),
        ('ｱ-', 'ｱｰ'),
        ('スーパ―', 'スーパー'),
        ('-アイ', '-アイ'),
        ('Hello-World', 'Hello-World'),
        ('ン-', 'ン-'),
        ('ッ-', 'ッ-'),
        ('漢字-', '漢字-'),
    ],
)
def test_default_options(text, expected):
    assert _transliterator()(text) == expected


def test_hatsuon_and_sokuon_options():
    assert _transliterator(allow_prolonged_hatsuon=True)('ン-ッ-') == 'ンーッ-'
    assert _transliterator(allow_prolonged_sokuon=True)('ン-ッ-') == 'ン-ッー'


def test_marks_between_alnums():
    transliterate = _transliterator(replace_prolonged_marks_following_alnums=True)
    assert transliterate('Aー1') == 'A-1'
    assert transliterate('ＡーＢ') == 'Ａ－Ｂ'
    assert transliterate('xーー9') == 'x--9'
    # no alphanumeric after the run
    assert transliterate('Aー') == 'Aー'
    assert transliterate('Aーあ') == 'Aーあ'


def test_all_options():
    transliterate = _transliterator(
        skip_already_transliterated_chars=True,
        allow_prolonged_hatsuon=True,
        allow_prolonged_sokuon=True,
        replace_prolonged_marks_following_alnums=True,
    )
    assert transliterate('カ-ッ-ン- Aー1 ｱ-') == 'カーッーンー A-1 ｱｰ'


def test_skip_already_transliterated():
    derived = CodePointUnit('-', 0).derive('ー', 0)
    units = [CodePointUnit('ア', 0), derived.derive('-', 3), CodePointUnit('', 4)]
    stage = ProlongedSoundMarksStage(skip_already_transliterated_chars=True)
    assert [u.text for u in stage(units)] == ['ア', '-', '']
    stage = ProlongedSoundMarksStage()
    assert [u.text for u in stage(units)] == ['ア', 'ー', '']


def test_offsets_and_sentinel():
    out = list(ProlongedSoundMarksStage()(build_units('ア-x')))
    assert [(u.text, u.offset) for u in out] == [('ア', 0), ('ー', 3), ('x', 6), ('', 7)]


def test_run_flushed_without_sentinel():
    units = [CodePointUnit('A', 0), CodePointUnit('ー', 1)]
    stage = ProlongedSoundMarksStage(replace_prolonged_marks_following_alnums=True)
    assert [(u.text, u.offset) for u in stage(units)] == [('A', 0), ('ー', 1)]


def test_char_type():
    assert char_type('1') == DIGIT | HALFWIDTH
    assert char_type('Ｚ') == ALPHABET
    assert is_alnum(char_type('a'))
    assert not is_alnum(char_type('あ'))
