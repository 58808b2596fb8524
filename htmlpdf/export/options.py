"""Merging caller options over the default option set."""

from typing import TypeVar

from pydantic import BaseModel

from htmlpdf.models import ExportOptions

ModelT = TypeVar("ModelT", bound=BaseModel)
T = TypeVar("T")


def _merge_fields(base: ModelT, override: ModelT) -> ModelT:
    # Nested models (margin) are taken whole, never merged side by side
    updates = {
        name: value
        for name in type(override).model_fields
        if (value := getattr(override, name)) is not None
    }
    return base.model_copy(update=updates)


def _pick(override: T | None, default: T) -> T:
    return override if override is not None else default


def merge_options(defaults: ExportOptions, overrides: ExportOptions | None) -> ExportOptions:
    """
    Return ``defaults`` with every field the caller supplied taken from ``overrides``.

    Scalar fields (top level, ``pdf`` and ``navigation``) use the override when it is
    not ``None``. ``pdf.margin`` is replaced as a whole: an override margin keeps none
    of the default sides. Values are not validated here.
    """
    if overrides is None:
        return defaults

    return ExportOptions(
        delay_ms=_pick(overrides.delay_ms, defaults.delay_ms),
        wait_for_selector=_pick(overrides.wait_for_selector, defaults.wait_for_selector),
        selector_timeout_ms=_pick(overrides.selector_timeout_ms, defaults.selector_timeout_ms),
        pdf=_merge_fields(defaults.pdf, overrides.pdf),
        navigation=_merge_fields(defaults.navigation, overrides.navigation),
    )
