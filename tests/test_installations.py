from __future__ import annotations

import json

import pytest

from gradlestep.installations import InstallationStore, find_installation, load_store
from gradlestep.model import GradleInstallation


def test_trailing_separator_is_stripped_once():
    assert GradleInstallation("g", "/opt/g/").home == "/opt/g"
    assert GradleInstallation("g", "C:\\gradle\\").home == "C:\\gradle"
    assert GradleInstallation("g", "/opt/g//").home == "/opt/g/"
    assert GradleInstallation("g", "/opt/g").home == "/opt/g"


def test_find_installation_first_match_wins():
    a = GradleInstallation("4.0", "/opt/a")
    b = GradleInstallation("4.0", "/opt/b")
    assert find_installation([a, b], "4.0") is a


def test_find_installation_is_case_sensitive_and_ignores_unset_names():
    insts = [GradleInstallation("Gradle", "/opt/g"), GradleInstallation("", "/opt/empty")]
    assert find_installation(insts, "gradle") is None
    assert find_installation(insts, None) is None
    assert find_installation(insts, "") is None


def test_replace_swaps_whole_snapshot_and_persists():
    saved = []
    store = InstallationStore([GradleInstallation("old", "/opt/old")], persist=saved.append)
    before = store.installations

    store.replace(GradleInstallation("new", "/opt/new"))

    assert [i.name for i in before] == ["old"]
    assert [i.name for i in store.installations] == ["new"]
    assert saved == [store.installations]


def test_convert_adopts_legacy_installations():
    store = InstallationStore()
    store.convert({"installations": [{"name": "4.0", "home": "/opt/gradle-4.0/"}]})
    assert store.installations == (GradleInstallation("4.0", "/opt/gradle-4.0"),)


def test_convert_without_key_keeps_installations():
    store = InstallationStore([GradleInstallation("4.0", "/opt/g")])
    store.convert({"somethingElse": 1})
    assert store.get("4.0") is not None


def test_store_rejects_foreign_objects():
    with pytest.raises(TypeError):
        InstallationStore(["not-an-installation"])


def test_load_store_roundtrip(tmp_path):
    path = tmp_path / "conf" / "installations.json"
    store = load_store(path)
    assert store.installations == ()

    store.replace(GradleInstallation("4.0", "/opt/gradle-4.0"))
    assert json.loads(path.read_text()) == [{"name": "4.0", "home": "/opt/gradle-4.0"}]

    reloaded = load_store(path)
    assert reloaded.get("4.0").home == "/opt/gradle-4.0"


def test_load_store_reads_legacy_property_bag(tmp_path):
    path = tmp_path / "installations.json"
    path.write_text(json.dumps({"installations": [{"name": "old", "home": "/opt/old"}]}))
    assert load_store(path).get("old").home == "/opt/old"


def test_load_store_rejects_other_json(tmp_path):
    path = tmp_path / "installations.json"
    path.write_text("42")
    with pytest.raises(ValueError):
        load_store(path)


def test_properties_survive_persistence(tmp_path):
    path = tmp_path / "installations.json"
    inst = GradleInstallation("4.0", "/opt/gradle-4.0", properties=("auto-install",))
    assert GradleInstallation.from_dict(inst.to_dict()) == inst

    load_store(path).replace(inst)
    assert load_store(path).get("4.0").properties == ("auto-install",)
