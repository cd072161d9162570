import pytest

from stack_solver import combine, settings, solve


@pytest.fixture(autouse=True)
def _fresh_settings():
    settings.clear_settings_cache()
    yield
    settings.clear_settings_cache()


def test_packaged_settings_match_defaults():
    loaded = settings.load_settings()

    assert loaded["segment_palette"] == settings.DEFAULT_SETTINGS["segment_palette"]
    assert loaded["footprint_tolerance"] == pytest.approx(1e-6)


def test_settings_file_overrides_palette(tmp_path, monkeypatch):
    settings_path = tmp_path / "settings.yaml"
    settings_path.write_text(
        "segment_palette:\n  - red\n  - blue\nfootprint_tolerance: 0.5\n",
        encoding="utf-8",
    )
    monkeypatch.setenv(settings.SETTINGS_ENV, str(settings_path))

    loaded = settings.load_settings()

    assert loaded["segment_palette"] == ["red", "blue"]
    assert loaded["footprint_tolerance"] == pytest.approx(0.5)
    assert loaded["solution_dir"] == settings.DEFAULT_SETTINGS["solution_dir"]


def test_invalid_values_fall_back_to_defaults(tmp_path, monkeypatch):
    settings_path = tmp_path / "settings.yaml"
    settings_path.write_text(
        "segment_palette: []\nfootprint_tolerance: tiny\nunknown: 3\n", encoding="utf-8"
    )
    monkeypatch.setenv(settings.SETTINGS_ENV, str(settings_path))

    loaded = settings.load_settings()

    assert loaded["segment_palette"] == settings.DEFAULT_SETTINGS["segment_palette"]
    assert loaded["footprint_tolerance"] == pytest.approx(1e-6)
    assert "unknown" not in loaded


def test_missing_settings_file_uses_defaults(tmp_path, monkeypatch):
    monkeypatch.setenv(settings.SETTINGS_ENV, str(tmp_path / "absent.yaml"))

    assert settings.load_settings() == settings.DEFAULT_SETTINGS


def test_palette_cycles_for_combined_segments(tmp_path, monkeypatch):
    settings_path = tmp_path / "settings.yaml"
    settings_path.write_text("segment_palette:\n  - red\n", encoding="utf-8")
    monkeypatch.setenv(settings.SETTINGS_ENV, str(settings_path))
    pallet = {"length": 120, "width": 80, "height": 15, "maxHeight": 200, "weight": 25, "maxWeight": 0}
    solutions = [
        solve(pallet, {"length": 40, "width": 30, "height": 20, "weight": w, "quantity": 8})
        for w in (3, 2, 1)
    ]

    combined = combine(solutions)

    assert [segment.color for segment in combined.meta.segments] == ["red", "red", "red"]


def test_changing_loaded_settings_does_not_leak():
    loaded = settings.load_settings()
    loaded["segment_palette"].clear()
    loaded["footprint_tolerance"] = 500.0

    assert settings.segment_palette() == settings.DEFAULT_SETTINGS["segment_palette"]
    assert settings.footprint_tolerance() == pytest.approx(1e-6)
