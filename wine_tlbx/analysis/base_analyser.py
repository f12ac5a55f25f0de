"""Base analyzer class for all analysis components in the toolbox."""

from abc import ABC, abstractmethod
from typing import Any


class BaseAnalyser(ABC):
    """Abstract base class for data analysis components.

    All analyzers must:
    1. Accept a DatasetView in their constructor
    2. Implement fit() to perform the analysis and return self for chaining
    3. Implement result() to return a frozen dataclass with results

    Analyzers never modify the view they receive; every ``fit()`` builds its tables from
    scratch and ``result()`` packages them into a new frozen dataclass.


    ---


    ### Adding a New Analyzer

    **1. Create analyzer class** (in `analysis/my_analyzer.py`):

    ```python
    from dataclasses import dataclass
    from wine_tlbx.data.views import DatasetView

    @dataclass(frozen=True)
    class MyAnalysisResult:
        '''Results package for MyAnalyzer.'''
        table: pd.DataFrame

    class MyAnalyzer(BaseAnalyser):
        def __init__(self, view: DatasetView):
            self._view = view
            self._table: pd.DataFrame | None = None

        def fit(self) -> "MyAnalyzer":
            self._table = ...
            return self

        def result(self) -> MyAnalysisResult:
            if self._table is None:
                raise ValueError("Must call fit() before result()")
            return MyAnalysisResult(table=self._table)
    ```

    **2. Add factory method** to `BaseDataset`:

    ```python
    def make_my_analyzer(self, columns: Iterable[str] | None = None) -> MyAnalyzer:
        from wine_tlbx.analysis.my_analyzer import MyAnalyzer
        return MyAnalyzer(self.analyzer_view(columns=columns))
    ```

    ### Adding Visualization Functions

    Plot helpers live in `plotting/` and:

    - Accept `*Result` dataclasses or a `DatasetView` (so pretty names are available)
    - Iterate groups in `QualityBucket.order()`
    - Return `Figure` objects and accept `**kwargs` forwarded to the seaborn call
    """

    @abstractmethod
    def fit(self) -> "BaseAnalyser":
        """Fit the analyzer to the data.

        Returns:
            Self for method chaining.
        """
        ...

    @abstractmethod
    def result(self) -> Any:
        """Return analysis results as a frozen dataclass instance.

        Raises:
            ValueError: If fit() has not been called yet.
        """
        ...
