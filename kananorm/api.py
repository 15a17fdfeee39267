from __future__ import annotations

from typing import Any, Callable, Iterable, Mapping, Union

from .chain import Stage, StageChain
from .chars import flatten, iter_units
from .errors import TransliterationConfigError
from .recipe import TransliterationRecipe
from .registry import make_stage

ConfigEntry = Union[str, tuple[str, Mapping[str, Any]]]


def make_chained_stage(configs: Iterable[ConfigEntry]) -> StageChain:
    """Build every stage in ``configs`` and chain them in order.

    An entry is either a stage name or a ``(name, options)`` pair.
    """
    stages: list[Stage] = []
    for config in configs:
        if isinstance(config, str):
            stages.append(make_stage(config))
        elif isinstance(config, (tuple, list)) and len(config) == 2:
            name, options = config
            stages.append(make_stage(name, options))
        else:
            raise TransliterationConfigError(f"Invalid transliterator configuration: {config!r}")
    return StageChain(stages)


def make_transliterator(
    configs_or_recipe: Iterable[ConfigEntry] | TransliterationRecipe,
) -> Callable[[str], str]:
    """Return a ``str -> str`` function for a stage list or a recipe.

    The stages are built once; the returned function can be called any
    number of times.

    Examples
    --------
    >>> transliterate = make_transliterator(TransliterationRecipe(replace_spaces=True))
    >>> transliterate("hello\\u3000world")
    'hello world'
    """
    if isinstance(configs_or_recipe, TransliterationRecipe):
        configs = configs_or_recipe.build_stage_configs()
    else:
        configs = list(configs_or_recipe)
    chain = make_chained_stage(configs)

    def transliterate(text: str) -> str:
        return flatten(chain(iter_units(text)))

    return transliterate
