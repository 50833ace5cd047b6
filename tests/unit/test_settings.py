from core.config import Settings


def test_settings_read_from_env_file(tmp_path, monkeypatch):
    """Values in .env are picked up and unrelated keys are ignored."""
    monkeypatch.chdir(tmp_path)
    monkeypatch.delenv("ORDER_CODE_MAX_ATTEMPTS", raising=False)
    monkeypatch.delenv("SUMMARY_REVENUE_SOURCE", raising=False)
    (tmp_path / ".env").write_text(
        "ORDER_CODE_MAX_ATTEMPTS=7\n"
        "SUMMARY_REVENUE_SOURCE=order_total\n"
        "SUMMARY_ACCEPTED_STATUSES=[\"Completed\", \"Processing\"]\n"
        "UNRELATED_DEPLOY_VAR=1\n",
        encoding="utf-8",
    )

    loaded = Settings()

    assert loaded.ORDER_CODE_MAX_ATTEMPTS == 7
    assert loaded.SUMMARY_REVENUE_SOURCE == "order_total"
    assert loaded.SUMMARY_ACCEPTED_STATUSES == ["Completed", "Processing"]


def test_environment_overrides_env_file(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    (tmp_path / ".env").write_text("ORDER_CODE_MAX_ATTEMPTS=7\n", encoding="utf-8")
    monkeypatch.setenv("ORDER_CODE_MAX_ATTEMPTS", "3")

    assert Settings().ORDER_CODE_MAX_ATTEMPTS == 3
