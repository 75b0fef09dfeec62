import pytest

from body_lines import main as main_module


def test_main_headless_snowball(tmp_path):
    log_file = tmp_path / "events.txt"
    main_module.main(["--scenario", "headless", "--log_file", str(log_file)])
    text = log_file.read_text()
    assert "Simulation started" in text
    assert "Snowball hit target" in text
    assert "Simulation ended" in text


def test_main_headless_with_config_file(tmp_path):
    config = tmp_path / "default.cfg"
    config.write_text("simulation_type = walker\nbody_x = 400\n")
    log_file = tmp_path / "events.txt"
    main_module.main(["--scenario", "headless", "--config", str(config), "--log_file", str(log_file)])
    text = log_file.read_text()
    assert "Configured for Walker scenario" in text
    assert "Distance to object: 111.80" in text
    assert "Added walking sequence: 10 moves" in text
    assert "Object caught successfully!" in text


def test_main_unknown_scenario_exits():
    with pytest.raises(SystemExit) as excinfo:
        main_module.main(["--scenario", "does_not_exist"])
    assert excinfo.value.code == 1


def test_main_missing_config_exits(tmp_path):
    with pytest.raises(SystemExit) as excinfo:
        main_module.main(["--scenario", "headless", "--config", str(tmp_path / "missing.cfg")])
    assert excinfo.value.code == 1
