"""
Request options for content loads.
"""

from typing import Any, Literal, Mapping, Optional, Union

from pydantic import BaseModel, ConfigDict, Field


OptionsLike = Union["RequestOptions", Mapping[str, Any], None]


class RequestOptions(BaseModel):
    """Options controlling how a load resolves content."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    draft: bool = False
    # True, False, or "querystring" to decide per request from ?edit
    edit_mode: Union[bool, Literal["querystring"]] = Field(default=False, alias="editMode")
    lang: Optional[str] = None
    # "querystring" reads the language from ?lang
    lang_mode: Optional[Literal["querystring"]] = Field(default=None, alias="langMode")
    log: bool = False

    @property
    def is_edit_mode(self) -> bool:
        return self.edit_mode is True

    def merge(self, overrides: OptionsLike = None) -> "RequestOptions":
        """Return a copy with explicitly supplied overrides applied.

        Fields the caller did not set keep their default value from ``self``.
        Edit mode always forces draft.
        """
        update = _explicit_fields(overrides)
        merged = self.model_copy(update=update) if update else self
        if merged.is_edit_mode and not merged.draft:
            merged = merged.model_copy(update={"draft": True})
        return merged


def _explicit_fields(overrides: OptionsLike) -> dict:
    if overrides is None:
        return {}
    if not isinstance(overrides, RequestOptions):
        overrides = RequestOptions.model_validate(dict(overrides))
    return overrides.model_dump(exclude_unset=True)


def resolve_options(defaults: OptionsLike = None, overrides: OptionsLike = None) -> RequestOptions:
    """Merge call-site overrides onto defaults."""
    return RequestOptions().merge(defaults).merge(overrides)
