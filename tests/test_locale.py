"""
Locale model, device locale and initial-locale resolution tests
"""
import pytest

from localize.core.errors import MissingConfigurationError
from localize.core.locale import (
    DefaultType,
    Locale,
    device_language_code,
    is_rtl_language,
    resolve_initial_locale,
    system_locale,
)


class TestLocale:

    def test_componentwise_equality(self):
        assert Locale("fr", "CA") == Locale("fr", "CA")
        assert Locale("fr", "CA") != Locale("fr")
        assert Locale("fr") == Locale("fr", None)

    def test_case_preserved(self):
        assert Locale("EN", "us").language_code == "EN"

    def test_empty_language_rejected(self):
        with pytest.raises(ValueError):
            Locale("")

    def test_str(self):
        assert str(Locale("fr", "CA")) == "fr-CA"
        assert str(Locale("fr")) == "fr"


class TestRightToLeft:

    @pytest.mark.parametrize("code", ["ar", "fa", "he", "ur", "ps", "sd"])
    def test_rtl_languages(self, code):
        assert is_rtl_language(code) is True

    @pytest.mark.parametrize("code", ["en", "fr", "pt", "AR", "iw"])
    def test_not_rtl(self, code):
        assert is_rtl_language(code) is False


class TestDeviceLocale:

    @pytest.mark.parametrize("raw,expected", [
        ("pt-BR", "pt"),
        ("en_US", "en"),
        ("de", "de"),
        ("zh_-Hant", "zh"),
    ])
    def test_device_language_code(self, raw, expected):
        assert device_language_code(raw) == expected

    def test_system_locale_reads_environment(self, monkeypatch):
        monkeypatch.setenv("LC_ALL", "es_MX.UTF-8")
        assert system_locale() == "es_MX"

    def test_system_locale_skips_c_locale(self, monkeypatch):
        monkeypatch.setenv("LC_ALL", "C")
        monkeypatch.setenv("LC_MESSAGES", "")
        monkeypatch.setenv("LANG", "it_IT.UTF-8")
        assert system_locale() == "it_IT"

    def test_system_locale_skips_c_utf8(self, monkeypatch):
        monkeypatch.delenv("LC_ALL", raising=False)
        monkeypatch.delenv("LC_MESSAGES", raising=False)
        monkeypatch.setenv("LANG", "C.UTF-8")
        monkeypatch.setattr("localize.core.locale._host_locale.getlocale", lambda: ("C", "UTF-8"))
        assert system_locale() == "en"
        loc = resolve_initial_locale(None, [Locale("ar")], DefaultType.DEVICE)
        assert loc == Locale("en")


class TestResolveInitialLocale:

    supported = [Locale("en", "US"), Locale("ar")]

    def test_persisted_wins(self):
        loc = resolve_initial_locale(Locale("ar"), self.supported, DefaultType.DEVICE, lambda: "pt-BR")
        assert loc == Locale("ar")

    def test_device_strategy_takes_language_only(self):
        loc = resolve_initial_locale(None, self.supported, DefaultType.DEVICE, lambda: "pt-BR")
        assert loc == Locale("pt")
        assert loc.country_code is None

    def test_first_supported(self):
        loc = resolve_initial_locale(None, self.supported, DefaultType.FIRST_SUPPORTED, lambda: "pt-BR")
        assert loc == Locale("en", "US")

    def test_first_supported_with_nothing_supported(self):
        with pytest.raises(MissingConfigurationError):
            resolve_initial_locale(None, [], DefaultType.FIRST_SUPPORTED)


class TestDefaultType:

    @pytest.mark.parametrize("raw,expected", [
        ("device", DefaultType.DEVICE),
        ("DEVICE", DefaultType.DEVICE),
        ("first_supported", DefaultType.FIRST_SUPPORTED),
        ("first-supported", DefaultType.FIRST_SUPPORTED),
        ("firstSupported", DefaultType.FIRST_SUPPORTED),
        (DefaultType.FIRST_SUPPORTED, DefaultType.FIRST_SUPPORTED),
    ])
    def test_parse(self, raw, expected):
        assert DefaultType.parse(raw) is expected

    def test_parse_unknown(self):
        with pytest.raises(ValueError):
            DefaultType.parse("random")
