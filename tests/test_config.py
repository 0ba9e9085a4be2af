"""
Tests for simulation parameters and parameter files.
"""

import json

import pytest

from brownian_exits import (
    ConfigurationError,
    Domain,
    SimulationParams,
    load_params,
    load_simulation_params,
)


def test_defaults_are_valid():
    params = SimulationParams()
    domain = params.validate()
    assert domain == Domain(0.0, 1.0, 0.0, 1.0)
    assert params.resolved_threads() >= 1


def test_explicit_thread_count():
    assert SimulationParams(n_threads=3).resolved_threads() == 3


def test_from_mapping_converts_bounds():
    params = SimulationParams.from_mapping(
        {"domain_x": [0, 2], "domain_y": [-1, 1], "max_global_exits": 10, "seed": 4}
    )
    assert params.domain_x == (0.0, 2.0)
    assert params.domain_y == (-1.0, 1.0)
    assert params.max_global_exits == 10
    assert params.seed == 4


def test_from_mapping_rejects_unknown_keys():
    with pytest.raises(ConfigurationError, match="step"):
        SimulationParams.from_mapping({"step": 0.1})


def test_from_mapping_rejects_bad_bounds():
    with pytest.raises(ConfigurationError, match="domain_x"):
        SimulationParams.from_mapping({"domain_x": [0.0, 1.0, 2.0]})


def test_load_json(tmp_path):
    path = tmp_path / "params.json"
    path.write_text(json.dumps({"step_size": 0.05, "paths_per_thread": 20}))
    assert load_params(path) == {"step_size": 0.05, "paths_per_thread": 20}
    params = load_simulation_params(path)
    assert params.step_size == 0.05
    assert params.paths_per_thread == 20


def test_load_toml(tmp_path):
    path = tmp_path / "params.toml"
    path.write_text(
        'domain_x = [0.0, 1.0]\n'
        'domain_y = [-0.5, 0.5]\n'
        'max_global_exits = 500\n'
        'buffer_segments = true\n'
    )
    params = load_simulation_params(path)
    assert params.domain_y == (-0.5, 0.5)
    assert params.max_global_exits == 500
    assert params.buffer_segments is True


def test_load_unsupported_format(tmp_path):
    path = tmp_path / "params.yaml"
    path.write_text("step_size: 0.1\n")
    with pytest.raises(ValueError, match="yaml"):
        load_params(path)


def test_validate_rejects_non_finite_step():
    with pytest.raises(ConfigurationError, match="step_size"):
        SimulationParams(step_size=float("nan")).validate()


@pytest.mark.parametrize("bounds", [[0.0, "wide"], 1.0, None])
def test_from_mapping_rejects_non_numeric_bounds(bounds):
    with pytest.raises(ConfigurationError, match="domain_x"):
        SimulationParams.from_mapping({"domain_x": bounds})


def test_load_unparseable_file(tmp_path):
    path = tmp_path / "params.toml"
    path.write_text("max_global_exits = [\n")
    with pytest.raises(ConfigurationError, match="params.toml"):
        load_params(path)
