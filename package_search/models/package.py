"""Package record model shared by the store, the index and the API."""

from typing import Any, List, Optional

from pydantic import AliasChoices, BaseModel, ConfigDict, Field


class PackageRecord(BaseModel):
    """
    One package's published metadata.

    Snapshots may use the PascalCase wire names, the Python field names, or
    the compact two-letter keys of the original database format. Responses
    always carry every field under its PascalCase name, even when the
    snapshot had no data for it.

    Only ``name``, ``description`` and ``provides`` take part in indexing;
    the rest is carried as-is for responses. Two records are equal when
    their names are equal.
    """

    model_config = ConfigDict(
        frozen=True,
        extra="forbid",
        populate_by_name=True,
    )

    check_depends: List[str] = Field(
        default_factory=list,
        validation_alias=AliasChoices("CheckDepends", "cd"),
        serialization_alias="CheckDepends",
    )
    conflicts: List[str] = Field(
        default_factory=list,
        validation_alias=AliasChoices("Conflicts", "cf"),
        serialization_alias="Conflicts",
    )
    depends: List[str] = Field(
        default_factory=list,
        validation_alias=AliasChoices("Depends", "dp"),
        serialization_alias="Depends",
    )
    description: Optional[str] = Field(
        default=None,
        validation_alias=AliasChoices("Description", "ds"),
        serialization_alias="Description",
    )
    first_submitted: int = Field(
        default=0,
        validation_alias=AliasChoices("FirstSubmitted", "fs"),
        serialization_alias="FirstSubmitted",
    )
    groups: List[str] = Field(
        default_factory=list,
        validation_alias=AliasChoices("Groups", "gs"),
        serialization_alias="Groups",
    )
    id: int = Field(
        default=0,
        validation_alias=AliasChoices("ID", "id"),
        serialization_alias="ID",
    )
    keywords: List[str] = Field(
        default_factory=list,
        validation_alias=AliasChoices("Keywords", "ks"),
        serialization_alias="Keywords",
    )
    last_modified: int = Field(
        default=0,
        validation_alias=AliasChoices("LastModified", "lm"),
        serialization_alias="LastModified",
    )
    license: List[str] = Field(
        default_factory=list,
        validation_alias=AliasChoices("License", "lc"),
        serialization_alias="License",
    )
    maintainer: Optional[str] = Field(
        default=None,
        validation_alias=AliasChoices("Maintainer", "mt"),
        serialization_alias="Maintainer",
    )
    make_depends: List[str] = Field(
        default_factory=list,
        validation_alias=AliasChoices("MakeDepends", "md"),
        serialization_alias="MakeDepends",
    )
    name: str = Field(
        ...,
        min_length=1,
        validation_alias=AliasChoices("Name", "na"),
        serialization_alias="Name",
        description="Unique package name",
    )
    num_votes: int = Field(
        default=0,
        validation_alias=AliasChoices("NumVotes", "nv"),
        serialization_alias="NumVotes",
    )
    opt_depends: List[str] = Field(
        default_factory=list,
        validation_alias=AliasChoices("OptDepends", "os"),
        serialization_alias="OptDepends",
    )
    out_of_date: Optional[int] = Field(
        default=None,
        validation_alias=AliasChoices("OutOfDate", "od"),
        serialization_alias="OutOfDate",
    )
    package_base: str = Field(
        default="",
        validation_alias=AliasChoices("PackageBase", "pb"),
        serialization_alias="PackageBase",
    )
    package_base_id: int = Field(
        default=0,
        validation_alias=AliasChoices("PackageBaseID", "pi"),
        serialization_alias="PackageBaseID",
    )
    popularity: float = Field(
        default=0.0,
        validation_alias=AliasChoices("Popularity", "pl"),
        serialization_alias="Popularity",
    )
    provides: List[str] = Field(
        default_factory=list,
        validation_alias=AliasChoices("Provides", "pv"),
        serialization_alias="Provides",
        description="Names this package satisfies; empty means only itself",
    )
    replaces: List[str] = Field(
        default_factory=list,
        validation_alias=AliasChoices("Replaces", "rp"),
        serialization_alias="Replaces",
    )
    url: Optional[str] = Field(
        default=None,
        validation_alias=AliasChoices("URL", "ul"),
        serialization_alias="URL",
    )
    url_path: str = Field(
        default="",
        validation_alias=AliasChoices("URLPath", "up"),
        serialization_alias="URLPath",
    )
    version: str = Field(
        default="",
        validation_alias=AliasChoices("Version", "vr"),
        serialization_alias="Version",
    )

    def __eq__(self, other: Any) -> bool:
        if not isinstance(other, PackageRecord):
            return NotImplemented
        return self.name == other.name

    def __hash__(self) -> int:
        return hash(self.name)

    def __repr__(self) -> str:
        return f"PackageRecord(name={self.name!r})"
