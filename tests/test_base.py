"""
Tests for the DataFrame transformers.
"""
import pandas as pd
import pytest

from remodeler import TransformRegistry
from remodeler.base import RemodelTransformer, TransformationPipeline


@pytest.fixture
def frame():
    return pd.DataFrame({"first": ["Ada", "Alan"], "last": ["Lovelace", "Turing"], "born": [1815, 1912]})


def rename_registry():
    registry = TransformRegistry()
    registry.add_key_xform_pairs(
        "full_name", lambda row, key: f"{row['first']} {row['last']}",
        "year", "born",
    )
    return registry


def test_transform_requires_fit(frame):
    with pytest.raises(ValueError):
        RemodelTransformer("rename", rename_registry()).transform(frame)


def test_remodels_each_row(frame):
    result = RemodelTransformer("rename", rename_registry()).fit_transform(frame)
    assert list(result.columns) == ["full_name", "year"]
    assert result["full_name"].tolist() == ["Ada Lovelace", "Alan Turing"]
    assert result["year"].tolist() == [1815, 1912]


def test_empty_frame_keeps_output_columns():
    empty = pd.DataFrame({"first": [], "last": [], "born": []})
    result = RemodelTransformer("rename", rename_registry()).fit_transform(empty)
    assert list(result.columns) == ["full_name", "year"]
    assert len(result) == 0


def test_pass_through_returns_copy(frame):
    transformer = RemodelTransformer("noop", TransformRegistry({"pass_through": True}))
    result = transformer.fit_transform(frame)
    assert result is not frame
    assert result.equals(frame)


def test_pipeline_chains_steps(frame):
    shout = TransformRegistry().add_key_xform_pairs(
        "full_name", lambda row, key: row["full_name"].upper(),
    )
    pipeline = TransformationPipeline("people")
    pipeline.add_step(RemodelTransformer("rename", rename_registry()))
    pipeline.add_step(RemodelTransformer("shout", shout))

    result = pipeline.fit_transform(frame)
    assert result["full_name"].tolist() == ["ADA LOVELACE", "ALAN TURING"]
    assert pipeline.get_step("shout") is not None
    assert pipeline.remove_step("shout") is True
    assert pipeline.get_step("shout") is None
    assert pipeline.remove_step("shout") is False


def test_fit_freezes_registry(frame):
    registry = rename_registry()
    transformer = RemodelTransformer("rename", registry)
    assert not transformer.is_fitted()
    transformer.fit(frame)
    assert transformer.is_fitted()
    assert registry.is_frozen


def test_fit_rejects_registry_without_output(frame):
    registry = TransformRegistry().exclude_keys("first")
    with pytest.raises(ValueError, match="no columns"):
        RemodelTransformer("empty", registry).fit(frame)
