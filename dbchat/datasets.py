"""Sample dataset catalog: schemas, canonical queries and pre-computed results."""

from typing import Any, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field, model_validator
from pydantic.alias_generators import to_camel

from dbchat.errors import UnknownDatasetError
from dbchat.sample_data import SAMPLE_DATASETS

ColumnType = Literal["string", "number", "currency", "date", "percentage", "status"]


class CatalogModel(BaseModel):
    """Base for catalog entries; accepts camelCase or snake_case keys."""

    model_config = ConfigDict(frozen=True, populate_by_name=True, alias_generator=to_camel)


class ColumnSpec(CatalogModel):
    """Display column of a query result."""

    key: str
    label: str
    type: ColumnType = "string"


class ColumnDefinition(CatalogModel):
    """Column of a table schema."""

    name: str
    type: str = Field(description="SQL type, e.g. VARCHAR(100) or DECIMAL(10,2)")
    primary_key: bool = False
    foreign_key: Optional[str] = None
    nullable: bool = True
    description: Optional[str] = None


class TableSchema(CatalogModel):
    """A table in a dataset schema."""

    name: str
    display_name: Optional[str] = None
    description: str = ""
    columns: list[ColumnDefinition] = Field(default_factory=list)
    record_count: int = 0


class DatabaseSchema(CatalogModel):
    """Schema of a sample database."""

    name: str
    description: str = ""
    tables: list[TableSchema] = Field(default_factory=list)

    def table(self, name: str) -> Optional[TableSchema]:
        """Look up a table by name, ignoring case and a schema prefix.

        Args:
            name: Table name as written in SQL (e.g. ``public.orders``)

        Returns:
            TableSchema or None
        """
        wanted = name.lower().split(".")[-1].strip('"')
        for table in self.tables:
            if table.name.lower() == wanted:
                return table
        return None


class CanonicalQuery(CatalogModel):
    """A natural-language to SQL to result-set mapping."""

    id: str
    name: str
    description: str = ""
    natural_language_patterns: list[str] = Field(default_factory=list)
    sql: str
    result_key: str
    columns: list[ColumnSpec] = Field(default_factory=list)
    category: str = ""

    @model_validator(mode="before")
    @classmethod
    def _default_name(cls, data: Any) -> Any:
        if isinstance(data, dict) and not data.get("name"):
            data = {**data, "name": data.get("id", "")}
        return data


class Dataset(CatalogModel):
    """A complete sample dataset."""

    id: str
    name: str
    description: str = ""
    database_schema: DatabaseSchema
    queries: list[CanonicalQuery] = Field(default_factory=list)
    data: dict[str, list[dict[str, Any]]] = Field(default_factory=dict)


DATASET_REGISTRY: dict[str, Dataset] = {
    entry["id"]: Dataset.model_validate(entry) for entry in SAMPLE_DATASETS
}


def get_dataset(dataset_type: str) -> Dataset:
    """Get a dataset by type.

    Args:
        dataset_type: Dataset identifier (e.g. "ecommerce")

    Returns:
        Dataset

    Raises:
        UnknownDatasetError: If the dataset is not registered
    """
    try:
        return DATASET_REGISTRY[dataset_type]
    except KeyError:
        raise UnknownDatasetError(dataset_type) from None


def is_valid_dataset_type(dataset_type: str) -> bool:
    return dataset_type in DATASET_REGISTRY


def list_datasets() -> list[Dataset]:
    """List all registered datasets in declaration order."""
    return list(DATASET_REGISTRY.values())
