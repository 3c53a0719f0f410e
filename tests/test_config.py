from sharepoint_rest import Settings


def test_settings_read_environment(monkeypatch) -> None:
    monkeypatch.setenv("SHAREPOINT_SITE_URL", "https://contoso.sharepoint.com/sites/dev/")
    monkeypatch.setenv("SHAREPOINT_ACCESS_TOKEN", "abc")
    monkeypatch.setenv("SHAREPOINT_REQUEST_TIMEOUT", "12.5")

    settings = Settings()

    assert settings.site_url == "https://contoso.sharepoint.com/sites/dev"
    assert settings.access_token == "abc"
    assert settings.request_timeout == 12.5
    assert settings.validate_settings() == []


def test_settings_defaults(monkeypatch) -> None:
    for name in ("SHAREPOINT_SITE_URL", "SHAREPOINT_REQUEST_TIMEOUT", "SHAREPOINT_DIGEST_MARGIN_SECONDS"):
        monkeypatch.delenv(name, raising=False)
    settings = Settings()
    assert settings.request_timeout == 30.0
    assert settings.digest_margin_seconds == 60.0
    assert settings.validate_settings() == ["SHAREPOINT_SITE_URL is required"]


def test_validate_settings_reports_all_errors() -> None:
    settings = Settings(site_url="ftp://files", request_timeout=0, digest_margin_seconds=-1)
    assert settings.validate_settings() == [
        "SHAREPOINT_SITE_URL must be an http(s) URL",
        "SHAREPOINT_REQUEST_TIMEOUT must be positive",
        "SHAREPOINT_DIGEST_MARGIN_SECONDS cannot be negative",
    ]
