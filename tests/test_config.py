"""
Settings and init option tests
"""
import pytest

from localize.core.config import InitOptions, Settings
from localize.core.errors import MissingConfigurationError
from localize.core.locale import DefaultType, Locale
from localize.infra.store import StorageBackend
from localize.loaders import DirectoryAssetLoader, MemoryAssetLoader, PackageAssetLoader, RemoteAssetLoader


@pytest.fixture
def clean_env(monkeypatch):
    for name in (
        "LOCALIZE_SUPPORTED_LANGUAGE_CODES",
        "LOCALIZE_DEFAULT_TYPE",
        "LOCALIZE_STORAGE_BACKEND",
        "LOCALIZE_LOCALES_DIR",
        "LOCALIZE_REMOTE_LOCALES_URL",
        "LOCALIZE_REMOTE_LOCALE_FILES",
    ):
        monkeypatch.delenv(name, raising=False)
    return monkeypatch


class TestSettings:

    def test_defaults(self, clean_env):
        cfg = Settings(_env_file=None)
        assert cfg.SUPPORTED_LANGUAGE_CODES == ["en"]
        assert cfg.DEFAULT_TYPE is DefaultType.DEVICE
        assert cfg.STORAGE_BACKEND is StorageBackend.FILE

    def test_from_environment(self, clean_env):
        clean_env.setenv("LOCALIZE_SUPPORTED_LANGUAGE_CODES", "en, ar ,fr")
        clean_env.setenv("LOCALIZE_DEFAULT_TYPE", "first-supported")
        clean_env.setenv("LOCALIZE_STORAGE_BACKEND", "memory")
        clean_env.setenv("LOCALIZE_REMOTE_LOCALE_FILES", "en.json,ar.json")
        cfg = Settings(_env_file=None)
        assert cfg.SUPPORTED_LANGUAGE_CODES == ["en", "ar", "fr"]
        assert cfg.DEFAULT_TYPE is DefaultType.FIRST_SUPPORTED
        assert cfg.STORAGE_BACKEND is StorageBackend.MEMORY
        assert cfg.REMOTE_LOCALE_FILES == ["en.json", "ar.json"]

    def test_storage_backend_is_case_insensitive(self, clean_env):
        clean_env.setenv("LOCALIZE_STORAGE_BACKEND", "MEMORY")
        assert Settings(_env_file=None).STORAGE_BACKEND is StorageBackend.MEMORY


class TestInitOptions:

    def test_locales_win_over_codes(self):
        opts = InitOptions(
            asset_loader=MemoryAssetLoader({}),
            supported_locales=[Locale("fr", "CA")],
            supported_language_codes=["en"],
        )
        assert opts.resolve_supported_locales() == [Locale("fr", "CA")]

    def test_codes_convert_to_locales(self):
        opts = InitOptions(asset_loader=MemoryAssetLoader({}), supported_language_codes=["en", "ar"])
        assert opts.resolve_supported_locales() == [Locale("en"), Locale("ar")]

    def test_neither_given(self):
        opts = InitOptions(asset_loader=MemoryAssetLoader({}))
        with pytest.raises(MissingConfigurationError):
            opts.resolve_supported_locales()

    def test_from_settings_builds_loaders(self, clean_env, tmp_path):
        cfg = Settings(
            _env_file=None,
            SUPPORTED_LANGUAGE_CODES="en,ar",
            LOCALES_DIR=str(tmp_path),
            REMOTE_LOCALES_URL="https://cdn.example.com/i18n",
            REMOTE_LOCALE_FILES="en.json",
            STORAGE_BACKEND="memory",
        )
        opts = InitOptions.from_settings(cfg, default_type=DefaultType.FIRST_SUPPORTED)
        assert isinstance(opts.asset_loader, PackageAssetLoader)
        assert [type(x) for x in opts.asset_loaders_extra] == [DirectoryAssetLoader, RemoteAssetLoader]
        assert opts.supported_language_codes == ["en", "ar"]
        assert opts.storage_backend is StorageBackend.MEMORY
        assert opts.default_type is DefaultType.FIRST_SUPPORTED
        assert opts.database_url is None
