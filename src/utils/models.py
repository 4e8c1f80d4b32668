"""
Record types consumed by the template engine.

This module contains:
- DeedRecord: one row of the "Description of Documents Scrutinized" table
- ParcelDetail: survey/boundary/measurement details for one document
- DeedTemplate: per deed type preview/narrative templates and custom placeholders

Records arrive from the sqlite store or from the Streamlit form as plain
dictionaries; the models coerce missing values to empty strings so that the
renderers only ever deal with ``str``.
"""

from typing import Dict, Optional
from pydantic import AliasChoices, BaseModel, ConfigDict, Field, field_validator


def _blank_if_none(value):
    if value is None:
        return ""
    return value if isinstance(value, str) else str(value)


class DeedRecord(BaseModel):
    """A single deed as entered in the deeds table."""
    model_config = ConfigDict(populate_by_name=True)

    id: Optional[int] = None
    deed_type: str = Field(default="", alias="type")
    executed_by: str = Field(default="", alias="executedBy")
    in_favour_of: str = Field(default="", alias="inFavourOf")
    date: str = ""
    document_number: str = Field(default="", alias="documentNumber")
    nature_of_doc: str = Field(
        default="",
        validation_alias=AliasChoices("nature_of_doc", "natureOfDocument", "natureOfDoc"),
    )
    custom_fields: Dict[str, str] = Field(default_factory=dict, alias="customFields")

    @field_validator("deed_type", "executed_by", "in_favour_of", "date",
                     "document_number", "nature_of_doc", mode="before")
    @classmethod
    def coerce_text(cls, v):
        return _blank_if_none(v)

    @field_validator("custom_fields", mode="before")
    @classmethod
    def coerce_custom_fields(cls, v):
        """Custom fields are a flat str -> str mapping; None values become blank."""
        if not v:
            return {}
        return {str(key): _blank_if_none(val) for key, val in dict(v).items()}

    @property
    def is_complete(self) -> bool:
        """Deeds only reach the table and the narrative when these three are filled."""
        return bool(self.deed_type and self.executed_by and self.in_favour_of)


# Field name -> literal rendered when the field is left empty.
PARCEL_DEFAULTS = {
    "doc_no": "(As per Doc No)",
    "survey_no": "(Survey No)",
    "as_per_revenue_record": "(As per Revenue Record)",
    "total_extent": "(Total Extent)",
    "plot_no": "(Plot No)",
    "location": "(Location like name of the place, village, city registration, sub-district etc.)",
    "north_by": "(North By)",
    "south_by": "(South By)",
    "east_by": "(East By)",
    "west_by": "(West By)",
    "north_measurement": "30 ft",
    "south_measurement": "30 ft",
    "east_measurement": "40 ft",
    "west_measurement": "40 ft",
    "total_extent_sq_ft": "1200 Sq.Ft",
}


class ParcelDetail(BaseModel):
    """Document/parcel details rendered into the ``{{table1}}`` region."""
    model_config = ConfigDict(populate_by_name=True)

    id: str = ""
    doc_no: str = Field(default="", alias="docNo")
    survey_no: str = Field(default="", alias="surveyNo")
    as_per_revenue_record: str = Field(default="", alias="asPerRevenueRecord")
    total_extent: str = Field(default="", alias="totalExtent")
    plot_no: str = Field(default="", alias="plotNo")
    location: str = ""
    north_by: str = Field(default="", alias="northBy")
    south_by: str = Field(default="", alias="southBy")
    east_by: str = Field(default="", alias="eastBy")
    west_by: str = Field(default="", alias="westBy")
    north_measurement: str = Field(default="", alias="northMeasurement")
    south_measurement: str = Field(default="", alias="southMeasurement")
    east_measurement: str = Field(default="", alias="eastMeasurement")
    west_measurement: str = Field(default="", alias="westMeasurement")
    total_extent_sq_ft: str = Field(default="", alias="totalExtentSqFt")

    @field_validator("*", mode="before")
    @classmethod
    def coerce_text(cls, v):
        return _blank_if_none(v)

    def display(self, field_name: str) -> str:
        """Returns the field value, or its placeholder label when empty."""
        return getattr(self, field_name) or PARCEL_DEFAULTS[field_name]


DEFAULT_PREVIEW_TEMPLATE = "{deedType} executed by {executedBy} in favour of {inFavourOf}"


class DeedTemplate(BaseModel):
    """Per deed type configuration maintained on the Deed Types page."""
    deed_type: str
    description: str = ""
    preview_template: str = ""
    history_template: str = ""
    custom_placeholders: Dict[str, str] = Field(default_factory=dict)

    @field_validator("description", "preview_template", "history_template", mode="before")
    @classmethod
    def coerce_text(cls, v):
        return _blank_if_none(v)

    @field_validator("custom_placeholders", mode="before")
    @classmethod
    def coerce_placeholders(cls, v):
        if not v:
            return {}
        return {str(key): _blank_if_none(desc) for key, desc in dict(v).items()}
