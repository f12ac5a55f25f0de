"""Column definitions for the red wine quality dataset."""

from .base_columns import BaseColumn, ColumnMetadata
from .buckets import BUCKET_COL, QUALITY_COL


class WineColumn(BaseColumn):
    """Column names for the [Wine Quality dataset](https://archive.ics.uci.edu/dataset/186/wine+quality) (red variant).

    Columns:
    - ``fixed_acidity``: float - Tartaric acid (g/dm³)
    - ``volatile_acidity``: float - Acetic acid (g/dm³)
    - ``citric_acid``: float - Citric acid (g/dm³)
    - ``residual_sugar``: float - Residual sugar (g/dm³)
    - ``chlorides``: float - Sodium chloride (g/dm³)
    - ``free_sulfur_dioxide``: float - Free SO2 (mg/dm³)
    - ``total_sulfur_dioxide``: float - Total SO2 (mg/dm³)
    - ``density``: float - Density (g/cm³)
    - ``ph``: float - pH
    - ``sulphates``: float - Potassium sulphate (g/dm³)
    - ``alcohol``: float - Alcohol (% vol.)
    - ``quality``: int - Sensory score 0-10 (target variable)
    - ``quality_bucket``: category - Ordinal bucket derived from ``quality``
    """

    FIXED_ACIDITY = "fixed_acidity"
    VOLATILE_ACIDITY = "volatile_acidity"
    CITRIC_ACID = "citric_acid"
    RESIDUAL_SUGAR = "residual_sugar"
    CHLORIDES = "chlorides"
    FREE_SULFUR_DIOXIDE = "free_sulfur_dioxide"
    TOTAL_SULFUR_DIOXIDE = "total_sulfur_dioxide"
    DENSITY = "density"
    PH = "ph"
    SULPHATES = "sulphates"
    ALCOHOL = "alcohol"

    # Target variable
    TARGET = QUALITY_COL
    """Sensory quality score (target variable)."""
    QUALITY = TARGET

    QUALITY_BUCKET = BUCKET_COL
    """Ordinal bucket derived from ``quality``."""

    def metadata(self) -> ColumnMetadata:
        return _COLUMN_METADATA_WINE[self]

    @classmethod
    def metric_columns(cls) -> list[str]:
        return [col.value for col in cls if col not in {cls.TARGET, cls.QUALITY_BUCKET}]

    @classmethod
    def derived_columns(cls) -> list[str]:
        return [cls.QUALITY_BUCKET.value]


def _metric(original: str, cleaned: str, label: str, unit: str = "") -> ColumnMetadata:
    pretty = f"{label} ({unit})" if unit else label
    return ColumnMetadata(original_name=original, cleaned_name=cleaned, dtype="float64", pretty_name=pretty, unit=unit)


_COLUMN_METADATA_WINE: dict[WineColumn, ColumnMetadata] = {
    # Acids
    WineColumn.FIXED_ACIDITY: _metric("fixed acidity", "fixed_acidity", "Fixed Acidity", "g/dm³"),
    WineColumn.VOLATILE_ACIDITY: _metric("volatile acidity", "volatile_acidity", "Volatile Acidity", "g/dm³"),
    WineColumn.CITRIC_ACID: _metric("citric acid", "citric_acid", "Citric Acid", "g/dm³"),
    WineColumn.PH: _metric("pH", "ph", "pH"),
    # Sugar and salts
    WineColumn.RESIDUAL_SUGAR: _metric("residual sugar", "residual_sugar", "Residual Sugar", "g/dm³"),
    WineColumn.CHLORIDES: _metric("chlorides", "chlorides", "Chlorides", "g/dm³"),
    WineColumn.SULPHATES: _metric("sulphates", "sulphates", "Sulphates", "g/dm³"),
    # Sulfur dioxide
    WineColumn.FREE_SULFUR_DIOXIDE: _metric(
        "free sulfur dioxide",
        "free_sulfur_dioxide",
        "Free Sulfur Dioxide",
        "mg/dm³",
    ),
    WineColumn.TOTAL_SULFUR_DIOXIDE: _metric(
        "total sulfur dioxide",
        "total_sulfur_dioxide",
        "Total Sulfur Dioxide",
        "mg/dm³",
    ),
    # Physical
    WineColumn.DENSITY: _metric("density", "density", "Density", "g/cm³"),
    WineColumn.ALCOHOL: _metric("alcohol", "alcohol", "Alcohol", "% vol."),
    # Target and derived
    WineColumn.TARGET: ColumnMetadata(
        original_name="quality",
        cleaned_name="quality",
        dtype="int64",
        pretty_name="Quality (score 0-10)",
    ),
    WineColumn.QUALITY_BUCKET: ColumnMetadata(
        original_name="quality_bucket",
        cleaned_name="quality_bucket",
        dtype="category",
        pretty_name="Quality Bucket",
    ),
}
