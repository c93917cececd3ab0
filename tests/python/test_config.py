from __future__ import annotations

import pytest

from flocksim.config import FlockConfig, InvalidConfiguration, PredatorConfig, SpeedLimits, load_config
from flocksim.sim.core.engine import FlockEngine


def test_defaults_are_valid():
    config = FlockConfig()
    assert config.validate() is config


@pytest.mark.parametrize("population", [0, -3])
def test_population_must_be_positive(population):
    with pytest.raises(InvalidConfiguration):
        FlockConfig(population=population).validate()


@pytest.mark.parametrize(
    "field_name",
    ["separation", "alignment", "cohesion", "distance", "separation_distance", "view_angle", "boundary_margin"],
)
def test_negative_weights_and_distances_are_rejected(field_name):
    config = FlockConfig(**{field_name: -0.1})
    with pytest.raises(InvalidConfiguration, match=field_name):
        config.validate()


def test_canvas_and_speed_band_are_checked():
    with pytest.raises(InvalidConfiguration):
        FlockConfig(canvas_width=0.0).validate()
    with pytest.raises(InvalidConfiguration):
        FlockConfig(speed=SpeedLimits(max_speed=1.0, min_speed=2.0)).validate()
    with pytest.raises(InvalidConfiguration):
        FlockConfig(predator=PredatorConfig(repulsion=-1.0)).validate()


def test_invalid_configuration_is_a_value_error():
    assert issubclass(InvalidConfiguration, ValueError)


def test_engine_fails_fast_on_invalid_configuration():
    with pytest.raises(InvalidConfiguration):
        FlockEngine(FlockConfig(population=0))
    with pytest.raises(InvalidConfiguration):
        FlockEngine(FlockConfig(cohesion=-1.0))


def test_load_config_builds_nested_sections():
    config = load_config(
        {
            "population": 12,
            "with_predator": True,
            "separation": 0.2,
            "speed": {"max_speed": 7.0},
            "predator": {"repulsion": 3.0},
        }
    )

    assert config.population == 12
    assert config.with_predator is True
    assert config.separation == 0.2
    assert config.speed.max_speed == 7.0
    assert config.speed.min_speed == SpeedLimits().min_speed
    assert config.predator.repulsion == 3.0
    assert config.predator.max_speed == PredatorConfig().max_speed


def test_load_config_rejects_unknown_keys():
    with pytest.raises(InvalidConfiguration, match="birds"):
        load_config({"birds": 10})
    with pytest.raises(InvalidConfiguration, match="turbo"):
        load_config({"speed": {"turbo": 1.0}})


def test_from_yaml(tmp_path):
    path = tmp_path / "flock.yaml"
    path.write_text(
        "population: 25\n"
        "view_angle: 1.5\n"
        "canvas_width: 640\n"
        "canvas_height: 480\n"
        "seed: 9\n"
        "predator:\n"
        "  max_speed: 12\n"
    )

    config = FlockConfig.from_yaml(path)

    assert config.population == 25
    assert config.view_angle == 1.5
    assert config.canvas_width == 640
    assert config.seed == 9
    assert config.predator.max_speed == 12
    engine = FlockEngine(config)
    assert engine.population_size() == 25


def test_from_yaml_empty_file_uses_defaults(tmp_path):
    path = tmp_path / "empty.yaml"
    path.write_text("")

    assert FlockConfig.from_yaml(path) == FlockConfig()


@pytest.mark.parametrize(
    "raw",
    [
        {"separation": "abc"},
        {"distance": None},
        {"canvas_width": "wide"},
        {"view_angle": float("nan")},
        {"speed": {"max_speed": "fast"}},
        {"predator": {"repulsion": [1, 2]}},
        {"alignment": True},
    ],
)
def test_non_numeric_values_raise_invalid_configuration(raw):
    with pytest.raises(InvalidConfiguration):
        FlockEngine(load_config(raw))


@pytest.mark.parametrize("population", [2.5, 3.0, "10", True])
def test_population_must_be_an_integer(population):
    with pytest.raises(InvalidConfiguration, match="population"):
        FlockEngine(FlockConfig(population=population))


def test_predator_flag_and_seed_types_are_checked():
    with pytest.raises(InvalidConfiguration, match="with_predator"):
        FlockConfig(with_predator="yes").validate()
    with pytest.raises(InvalidConfiguration, match="seed"):
        FlockConfig(seed=1.5).validate()


def test_non_mapping_yaml_is_rejected(tmp_path):
    path = tmp_path / "list.yaml"
    path.write_text("- 1\n- 2\n")

    with pytest.raises(InvalidConfiguration):
        FlockConfig.from_yaml(path)
    with pytest.raises(InvalidConfiguration, match="speed"):
        load_config({"speed": [5, 2]})


@pytest.mark.parametrize(
    "overrides",
    [
        {"canvas_width": 20.0, "boundary_margin": 15.0},
        {"canvas_height": 70.0, "boundary_margin": 40.0},
    ],
)
def test_overlapping_margin_bands_are_rejected(overrides):
    with pytest.raises(InvalidConfiguration, match="boundary_margin"):
        FlockEngine(FlockConfig(**overrides))


def test_margin_of_exactly_half_the_canvas_is_allowed():
    config = FlockConfig(canvas_width=80.0, canvas_height=80.0, boundary_margin=40.0)
    assert config.validate() is config
