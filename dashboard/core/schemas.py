"""
Base schema for records stored as spreadsheet rows.
"""
from typing import Any

from pydantic import BaseModel, ConfigDict, model_validator
from pydantic.alias_generators import to_camel


class SheetModel(BaseModel):
    """
    Pydantic model whose JSON/row keys are the camelCase sheet headers.

    Blank cells are treated as missing so field defaults apply.
    """
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    @model_validator(mode="before")
    @classmethod
    def drop_blank_cells(cls, data: Any) -> Any:
        if isinstance(data, dict):
            return {key: value for key, value in data.items() if value != ""}
        return data

    def to_row(self, **kwargs: Any) -> dict[str, Any]:
        """Dump using sheet headers, omitting unset values."""
        return self.model_dump(by_alias=True, exclude_none=True, mode="json", **kwargs)
