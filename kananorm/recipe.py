from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Sequence

from .errors import TransliterationConfigError

logger = logging.getLogger(__name__)

StageConfig = tuple[str, dict[str, Any]]

RECIPE_HYPHENS_PRECEDENCE = ["jisx0208_90_windows", "jisx0201"]
HIRA_KATA_MODES = ("hira_to_kata", "kata_to_hira")
CHARSETS = ("unijis_2004", "unijis_90")
# string value each bool-or-string field accepts besides True/False
SUB_MODES = {
    "replace_circled_or_squared_characters": "exclude-emojis",
    "to_fullwidth": "u005c-as-yen-sign",
    "to_halfwidth": "hankaku-kana",
    "remove_ivs_svs": "drop-all-selectors",
}


class ConfigListBuilder:
    """Ordered (stage name, options) list with head and tail sections.

    The builder is immutable: every insertion returns a new builder. A name
    already queued is left alone unless ``force_replace`` is given, in which
    case its options are swapped in place.
    """

    def __init__(
        self,
        head: Sequence[StageConfig] = (),
        tail: Sequence[StageConfig] = (),
    ):
        self.head = list(head)
        self.tail = list(tail)

    @staticmethod
    def _index(configs: list[StageConfig], name: str) -> int:
        for i, (existing, _) in enumerate(configs):
            if existing == name:
                return i
        return -1

    def _insert(self, configs: list[StageConfig], config: StageConfig, force_replace: bool, at_front: bool) -> list[StageConfig]:
        configs = list(configs)
        index = self._index(configs, config[0])
        if index >= 0:
            if force_replace:
                configs[index] = config
        elif at_front:
            configs.insert(0, config)
        else:
            configs.append(config)
        return configs

    def insert_head(self, config: StageConfig, force_replace: bool = False) -> ConfigListBuilder:
        return ConfigListBuilder(self._insert(self.head, config, force_replace, True), self.tail)

    def insert_middle(self, config: StageConfig, force_replace: bool = False) -> ConfigListBuilder:
        return ConfigListBuilder(self.head, self._insert(self.tail, config, force_replace, True))

    def insert_tail(self, config: StageConfig, force_replace: bool = False) -> ConfigListBuilder:
        return ConfigListBuilder(self.head, self._insert(self.tail, config, force_replace, False))

    def build(self) -> list[StageConfig]:
        return self.head + self.tail


@dataclass(frozen=True)
class TransliterationRecipe:
    """High level switches that resolve into an ordered list of stages.

    String-valued switches select a sub-mode: ``"exclude-emojis"`` for
    circled characters, ``"u005c-as-yen-sign"`` for ``to_fullwidth``,
    ``"hankaku-kana"`` for ``to_halfwidth`` and ``"drop-all-selectors"`` for
    ``remove_ivs_svs``. ``replace_hyphens`` also takes a precedence list.
    """

    kanji_old_new: bool = False
    hira_kata: str | None = None
    replace_japanese_iteration_marks: bool = False
    replace_suspicious_hyphens_to_prolonged_sound_marks: bool = False
    replace_circled_or_squared_characters: bool | str = False
    replace_combined_characters: bool = False
    replace_ideographic_annotations: bool = False
    replace_radicals: bool = False
    replace_spaces: bool = False
    replace_hyphens: bool | Sequence[str] = False
    replace_mathematical_alphanumerics: bool = False
    replace_roman_numerals: bool = False
    combine_decomposed_hiraganas_and_katakanas: bool = False
    to_fullwidth: bool | str = False
    to_halfwidth: bool | str = False
    remove_ivs_svs: bool | str = False
    charset: str = "unijis_2004"

    def validate(self) -> None:
        errors = []
        for field_name, sub_mode in SUB_MODES.items():
            value = getattr(self, field_name)
            if not isinstance(value, bool) and value != sub_mode:
                errors.append(f"{field_name} must be a bool or {sub_mode!r}, got {value!r}")
        hyphens = self.replace_hyphens
        if not isinstance(hyphens, bool) and not (
            isinstance(hyphens, (list, tuple)) and all(isinstance(p, str) for p in hyphens)
        ):
            errors.append(
                f"replace_hyphens must be a bool or a list of column names, got {hyphens!r}"
            )
        if self.to_fullwidth and self.to_halfwidth:
            errors.append("to_fullwidth and to_halfwidth are mutually exclusive")
        if self.hira_kata is not None and self.hira_kata not in HIRA_KATA_MODES:
            errors.append(f"hira_kata must be one of {', '.join(HIRA_KATA_MODES)}")
        if self.charset not in CHARSETS:
            errors.append(f"charset must be one of {', '.join(CHARSETS)}")
        if errors:
            raise TransliterationConfigError("; ".join(errors))

    def build_stage_configs(self) -> list[StageConfig]:
        """Resolve the recipe into (stage name, options) pairs in execution order."""
        self.validate()
        ctx = ConfigListBuilder()
        for step in (
            self._kanji_old_new,
            self._suspicious_hyphens,
            self._circled_or_squared,
            self._combined,
            self._ideographic_annotations,
            self._radicals,
            self._spaces,
            self._hyphens,
            self._mathematical_alphanumerics,
            self._roman_numerals,
            self._combine_decomposed,
            self._to_fullwidth,
            self._hira_kata,
            self._iteration_marks,
            self._to_halfwidth,
            self._remove_ivs_svs,
        ):
            ctx = step(ctx)
        configs = ctx.build()
        logger.debug("recipe resolved to %s", [name for name, _ in configs])
        return configs

    def _ivs_svs_bracket(self, ctx: ConfigListBuilder, drop_all_selectors: bool) -> ConfigListBuilder:
        ctx = ctx.insert_head(
            ("ivs-svs-base", {"mode": "ivs-or-svs", "charset": self.charset}),
            force_replace=True,
        )
        return ctx.insert_tail(
            (
                "ivs-svs-base",
                {
                    "mode": "base",
                    "drop_selectors_altogether": drop_all_selectors,
                    "charset": self.charset,
                },
            ),
            force_replace=True,
        )

    def _kanji_old_new(self, ctx):
        if self.kanji_old_new:
            ctx = self._ivs_svs_bracket(ctx, False)
            ctx = ctx.insert_middle(("kanji-old-new", {}))
        return ctx

    def _suspicious_hyphens(self, ctx):
        if self.replace_suspicious_hyphens_to_prolonged_sound_marks:
            ctx = ctx.insert_middle(
                ("prolonged-sound-marks", {"replace_prolonged_marks_following_alnums": True})
            )
        return ctx

    def _circled_or_squared(self, ctx):
        value = self.replace_circled_or_squared_characters
        if value:
            ctx = ctx.insert_middle(
                ("circled-or-squared", {"include_emojis": value != "exclude-emojis"})
            )
        return ctx

    def _combined(self, ctx):
        if self.replace_combined_characters:
            ctx = ctx.insert_middle(("combined", {}))
        return ctx

    def _ideographic_annotations(self, ctx):
        if self.replace_ideographic_annotations:
            ctx = ctx.insert_middle(("ideographic-annotations", {}))
        return ctx

    def _radicals(self, ctx):
        if self.replace_radicals:
            ctx = ctx.insert_middle(("radicals", {}))
        return ctx

    def _spaces(self, ctx):
        if self.replace_spaces:
            ctx = ctx.insert_middle(("spaces", {}))
        return ctx

    def _hyphens(self, ctx):
        value = self.replace_hyphens
        if value is not False:
            if isinstance(value, bool):
                precedence = list(RECIPE_HYPHENS_PRECEDENCE)
            else:
                precedence = list(value)
            ctx = ctx.insert_middle(("hyphens", {"precedence": precedence}))
        return ctx

    def _mathematical_alphanumerics(self, ctx):
        if self.replace_mathematical_alphanumerics:
            ctx = ctx.insert_middle(("mathematical-alphanumerics", {}))
        return ctx

    def _roman_numerals(self, ctx):
        if self.replace_roman_numerals:
            ctx = ctx.insert_middle(("roman-numerals", {}))
        return ctx

    def _combine_decomposed(self, ctx):
        if self.combine_decomposed_hiraganas_and_katakanas:
            ctx = ctx.insert_head(("hira-kata-composition", {}))
        return ctx

    def _to_fullwidth(self, ctx):
        if self.to_fullwidth:
            ctx = ctx.insert_tail(
                (
                    "jisx0201-and-alike",
                    {
                        "fullwidth_to_halfwidth": False,
                        "u005c_as_yen_sign": self.to_fullwidth == "u005c-as-yen-sign",
                        "combine_voiced_sound_marks": True,
                    },
                )
            )
        return ctx

    def _hira_kata(self, ctx):
        if self.hira_kata is not None:
            ctx = ctx.insert_middle(("hira-kata", {"mode": self.hira_kata}))
        return ctx

    def _iteration_marks(self, ctx):
        if self.replace_japanese_iteration_marks:
            # iteration marks must see composed kana
            ctx = ctx.insert_head(
                ("hira-kata-composition", {"compose_non_combining_marks": True})
            )
            ctx = ctx.insert_middle(("japanese-iteration-marks", {}))
        return ctx

    def _to_halfwidth(self, ctx):
        if self.to_halfwidth:
            ctx = ctx.insert_tail(
                (
                    "jisx0201-and-alike",
                    {
                        "fullwidth_to_halfwidth": True,
                        "convert_gl": True,
                        "convert_gr": self.to_halfwidth == "hankaku-kana",
                    },
                )
            )
        return ctx

    def _remove_ivs_svs(self, ctx):
        if self.remove_ivs_svs:
            ctx = self._ivs_svs_bracket(ctx, self.remove_ivs_svs == "drop-all-selectors")
        return ctx
