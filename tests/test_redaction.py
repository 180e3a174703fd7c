from __future__ import annotations

from pathlib import Path

from raspimcu.utils.redaction import Redactor


def test_redact_serial_is_stable_per_value():
    redactor = Redactor()

    first = redactor.redact_serial("E66038B713849D31")
    again = redactor.redact_serial("E66038B713849D31")
    other = redactor.redact_serial("E66038B713849D99")

    assert first == again == "xxxx31#1"
    assert other == "xxxx99#2"
    assert redactor.redact_serial(None) == ""


def test_redact_path_hides_user_name():
    redactor = Redactor()
    user = Path.home().name
    path = f"/media/{user}/RPI-RP2"

    assert redactor.redact_path(path) == "/media/<user>/RPI-RP2"
    assert Redactor(enabled=False).redact_path(path) == path
