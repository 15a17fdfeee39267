from __future__ import annotations

import inspect
import logging
from typing import Any, Callable, Mapping

from .chain import Stage
from .errors import TransliterationConfigError
from .stages.circled_or_squared import CircledOrSquaredStage
from .stages.combined import CombinedStage
from .stages.hira_kata import HiraKataStage
from .stages.hira_kata_composition import HiraKataCompositionStage
from .stages.hyphens import HyphensStage
from .stages.ideographic_annotations import IdeographicAnnotationsStage
from .stages.ivs_svs_base import IvsSvsBaseStage
from .stages.japanese_iteration_marks import JapaneseIterationMarksStage
from .stages.jisx0201_and_alike import Jisx0201AndAlikeStage
from .stages.kanji_old_new import KanjiOldNewStage
from .stages.mathematical_alphanumerics import MathematicalAlphanumericsStage
from .stages.prolonged_sound_marks import ProlongedSoundMarksStage
from .stages.radicals import RadicalsStage
from .stages.roman_numerals import RomanNumeralsStage
from .stages.spaces import SpacesStage

logger = logging.getLogger(__name__)

STAGES: dict[str, type[Stage]] = {
    cls.name: cls
    for cls in (
        SpacesStage,
        RadicalsStage,
        MathematicalAlphanumericsStage,
        IdeographicAnnotationsStage,
        KanjiOldNewStage,
        HyphensStage,
        IvsSvsBaseStage,
        HiraKataCompositionStage,
        HiraKataStage,
        Jisx0201AndAlikeStage,
        ProlongedSoundMarksStage,
        CircledOrSquaredStage,
        CombinedStage,
        RomanNumeralsStage,
        JapaneseIterationMarksStage,
    )
}


def get_stage_factory(name: str) -> Callable[..., Stage]:
    """Return the stage class registered under ``name``."""
    try:
        return STAGES[name]
    except KeyError:
        raise TransliterationConfigError(f"Transliterator not found: {name}") from None


def make_stage(name: str, options: Mapping[str, Any] | None = None) -> Stage:
    """Build the stage ``name`` from ``options``, rejecting unknown option keys."""
    factory = get_stage_factory(name)
    options = dict(options or {})
    accepted = set(inspect.signature(factory).parameters)
    unknown = sorted(set(options) - accepted)
    if unknown:
        raise TransliterationConfigError(
            f"{name}: unknown options {', '.join(unknown)}"
        )
    logger.debug("building stage %s with %r", name, options)
    return factory(**options)
