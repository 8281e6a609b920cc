import pytest

from langmap.config import load_config, parse_lang_pairs


ENV_VARS = (
    "LANGMAP_LANGUAGE_DATA_PAGE",
    "LANGMAP_HTTP_HOSTS_BY_LANG",
    "LANGMAP_HOST_PREFIX",
    "LANGMAP_TRANSLATION_FORMAT",
    "LANGMAP_LANGUAGE_NAMES",
)


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    for name in ENV_VARS:
        monkeypatch.delenv(name, raising=False)


def test_load_config_requires_env(monkeypatch):
    monkeypatch.delenv("MW_API_URL", raising=False)

    with pytest.raises(RuntimeError):
        load_config()


def test_load_config_defaults(monkeypatch):
    monkeypatch.setenv("MW_API_URL", "https://example.org/api.php")

    cfg = load_config()
    assert cfg.language_data_page == "system:languages"
    assert cfg.http_hosts_by_lang == ()
    assert cfg.host_prefix == "https://"
    assert cfg.translation_format == "{name}: {heading}"
    assert cfg.language_names is None


def test_load_config_reads_values(monkeypatch):
    monkeypatch.setenv("MW_API_URL", "https://example.org/api.php")
    monkeypatch.setenv("LANGMAP_LANGUAGE_DATA_PAGE", "")
    monkeypatch.setenv("LANGMAP_HTTP_HOSTS_BY_LANG", "cs:fykos.cz, en:fykos.org")
    monkeypatch.setenv("LANGMAP_LANGUAGE_NAMES", "{\"cs\": \"Česky\"}")
    monkeypatch.setenv("LANGMAP_TRANSLATION_FORMAT", "{code}: {heading}")

    cfg = load_config()
    assert cfg.language_data_page is None
    assert cfg.http_hosts_by_lang == (("cs", "fykos.cz"), ("en", "fykos.org"))
    assert cfg.language_names == {"cs": "Česky"}
    assert cfg.translation_format == "{code}: {heading}"


def test_load_config_rejects_bad_values(monkeypatch):
    monkeypatch.setenv("MW_API_URL", "https://example.org/api.php")
    monkeypatch.setenv("LANGMAP_LANGUAGE_NAMES", "[1, 2]")
    with pytest.raises(RuntimeError):
        load_config()

    monkeypatch.delenv("LANGMAP_LANGUAGE_NAMES")
    monkeypatch.setenv("LANGMAP_TRANSLATION_FORMAT", "{title}")
    with pytest.raises(RuntimeError):
        load_config()


def test_parse_lang_pairs():
    assert parse_lang_pairs("") == ()
    assert parse_lang_pairs("cs:fykos.cz,,en:fykos.org") == (
        ("cs", "fykos.cz"),
        ("en", "fykos.org"),
    )
    with pytest.raises(RuntimeError):
        parse_lang_pairs("fykos.cz")


def test_load_config_rejects_attribute_lookup_in_format(monkeypatch):
    monkeypatch.setenv("MW_API_URL", "https://example.org/api.php")
    monkeypatch.setenv("LANGMAP_TRANSLATION_FORMAT", "{name.upperx}")

    with pytest.raises(RuntimeError):
        load_config()
