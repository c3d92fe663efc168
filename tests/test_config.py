import pytest

from trishatter.config import (
    ExplodeSettings,
    MeshSettings,
    Settings,
    load_settings,
)


def test_defaults():
    settings = Settings()
    assert settings.explode.fragment_count == 4
    assert settings.explode.max_iterations == 10
    assert settings.explode.seed is None
    assert settings.mesh.resolution == 3
    assert settings.mesh.noise_amplitude == 0.0


def test_load_settings(tmp_path):
    path = tmp_path / 'settings.yaml'
    path.write_text(
        "mesh:\n"
        "  resolution: 2\n"
        "  noise_amplitude: 0.25\n"
        "explode:\n"
        "  fragment_count: 8\n"
        "  seed: 7\n",
        encoding='utf-8',
    )
    settings = load_settings(path)
    assert settings.mesh == MeshSettings(resolution=2, noise_amplitude=0.25)
    assert settings.explode == ExplodeSettings(fragment_count=8, max_iterations=10, seed=7)


def test_load_empty_file_gives_defaults(tmp_path):
    path = tmp_path / 'empty.yaml'
    path.write_text("", encoding='utf-8')
    assert load_settings(path) == Settings()


def test_missing_file(tmp_path):
    with pytest.raises(FileNotFoundError):
        load_settings(tmp_path / 'nope.yaml')


def test_unknown_keys_rejected():
    with pytest.raises(ValueError):
        Settings.from_dict({'explode': {'fragments': 3}})
    with pytest.raises(ValueError):
        Settings.from_dict({'render': {}})
    with pytest.raises(ValueError):
        Settings.from_dict({'mesh': [1, 2]})


def test_invalid_values_rejected():
    with pytest.raises(ValueError):
        ExplodeSettings(fragment_count=0)
    with pytest.raises(ValueError):
        ExplodeSettings(max_iterations=-2)
    with pytest.raises(ValueError):
        MeshSettings(resolution=-1)


def test_to_dict_round_trip():
    settings = Settings.from_dict({'explode': {'fragment_count': 6}})
    assert Settings.from_dict(settings.to_dict()) == settings


def test_wrongly_typed_values_rejected():
    with pytest.raises(ValueError, match='fragment_count'):
        Settings.from_dict({'explode': {'fragment_count': '4'}})
    with pytest.raises(ValueError, match='seed'):
        Settings.from_dict({'explode': {'seed': 1.5}})
    with pytest.raises(ValueError, match='max_iterations'):
        ExplodeSettings(max_iterations=True)
    with pytest.raises(ValueError, match='resolution'):
        MeshSettings(resolution='3')
    with pytest.raises(ValueError, match='noise_amplitude'):
        Settings.from_dict({'mesh': {'noise_amplitude': 'big'}})


def test_integer_noise_values_accepted():
    settings = Settings.from_dict({'mesh': {'noise_amplitude': 1, 'noise_frequency': 2}})
    assert settings.mesh.noise_amplitude == 1
    assert settings.mesh.noise_frequency == 2
