"""
DataFrame Transformer Classes

Provides sklearn-style transformer classes that apply a TransformRegistry to
every row of a pandas DataFrame.
"""

from abc import ABC, abstractmethod
from typing import List, Optional
import pandas as pd
import logging

from .registry import TransformRegistry


class BaseTransformer(ABC):
    """Base class for all DataFrame transformers."""

    def __init__(self, name: str):
        self.name = name
        self.logger = logging.getLogger(f"remodeler.pipeline.{name}")
        self._fitted = False

    @abstractmethod
    def fit(self, df: pd.DataFrame, **kwargs) -> 'BaseTransformer':
        pass

    @abstractmethod
    def transform(self, df: pd.DataFrame, **kwargs) -> pd.DataFrame:
        pass

    def fit_transform(self, df: pd.DataFrame, **kwargs) -> pd.DataFrame:
        return self.fit(df, **kwargs).transform(df, **kwargs)

    def is_fitted(self) -> bool:
        return self._fitted


class RemodelTransformer(BaseTransformer):
    """
    Remodels each row of a DataFrame with a TransformRegistry.

    The registry is frozen on fit, so rules cannot change between the fit
    and the rows it is later applied to.
    """

    def __init__(self, name: str, registry: TransformRegistry):
        super().__init__(name)
        self.registry = registry

    def fit(self, df: pd.DataFrame, **kwargs) -> 'RemodelTransformer':
        """Check the registry produces output and freeze it."""
        if not self.registry.options.pass_through and not self.registry.output_keys():
            raise ValueError(f"Registry for step '{self.name}' produces no columns")
        self.registry.freeze()
        self._fitted = True
        return self

    def transform(self, df: pd.DataFrame, **kwargs) -> pd.DataFrame:
        """Return a new DataFrame with one remodeled row per input row."""
        if not self._fitted:
            raise ValueError("Must call fit() before transform()")

        if self.registry.options.pass_through:
            return df.copy()

        self.logger.info("Remodeling %d records", len(df))
        rows = [self.registry.apply(record) for record in df.to_dict(orient="records")]
        return pd.DataFrame(rows, columns=self.registry.output_keys(), index=df.index)


class TransformationPipeline:
    """Pipeline for chaining DataFrame transformers."""

    def __init__(self, name: str = "pipeline"):
        self.name = name
        self.steps: List[BaseTransformer] = []
        self.logger = logging.getLogger(f"remodeler.pipeline.{name}")

    def add_step(self, transformer: BaseTransformer) -> 'TransformationPipeline':
        self.steps.append(transformer)
        self.logger.info("Added step: %s", transformer.name)
        return self

    def fit(self, df: pd.DataFrame, **kwargs) -> 'TransformationPipeline':
        """Fit each step on the previous step's output."""
        current_df = df
        for step in self.steps:
            current_df = step.fit_transform(current_df, **kwargs)
        return self

    def transform(self, df: pd.DataFrame, **kwargs) -> pd.DataFrame:
        current_df = df
        for step in self.steps:
            self.logger.info("Applying step: %s", step.name)
            current_df = step.transform(current_df, **kwargs)
        return current_df

    def fit_transform(self, df: pd.DataFrame, **kwargs) -> pd.DataFrame:
        return self.fit(df, **kwargs).transform(df, **kwargs)

    def get_step(self, name: str) -> Optional[BaseTransformer]:
        return next((step for step in self.steps if step.name == name), None)

    def remove_step(self, name: str) -> bool:
        step = self.get_step(name)
        if step is None:
            return False
        self.steps.remove(step)
        self.logger.info("Removed step: %s", name)
        return True
