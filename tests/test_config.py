"""
Bookshelf API — Settings Tests
================================

What:  Validation rules and derived values of the Settings object.
How:   Builds Settings instances directly with keyword overrides (the
       module-level singleton is left alone).
"""

import pytest
from pydantic import ValidationError

from bookshelf.config import Settings


class TestSettings:

    def test_log_level_is_normalized(self):
        assert Settings(log_level="debug").log_level == "DEBUG"

    def test_invalid_log_level_rejected(self):
        with pytest.raises(ValidationError):
            Settings(log_level="chatty")

    def test_books_prefix_must_be_absolute(self):
        with pytest.raises(ValidationError):
            Settings(books_prefix="books")

    def test_books_prefix_trailing_slash_removed(self):
        assert Settings(books_prefix="/api/books/").books_prefix == "/api/books"

    def test_cors_origins_split(self):
        settings = Settings(cors_origins="http://a.test, http://b.test,")

        assert settings.cors_origins_list == ["http://a.test", "http://b.test"]

    def test_sqlite_engine_has_no_pool_options(self):
        options = Settings(database_url="sqlite+aiosqlite:///:memory:").engine_options

        assert "pool_size" not in options
        assert options["echo"] is False

    def test_server_engine_gets_pool_options(self):
        settings = Settings(
            database_url="postgresql+asyncpg://u:p@db:5432/books",
            db_pool_size=7,
        )

        options = settings.engine_options

        assert options["pool_size"] == 7
        assert options["max_overflow"] == settings.db_max_overflow
        assert options["pool_pre_ping"] is True

    def test_production_check_rejects_bad_url(self):
        with pytest.raises(ValueError, match="DATABASE_URL"):
            Settings(database_url="not-a-url").validate_required_for_production()

    def test_production_check_accepts_default(self):
        Settings().validate_required_for_production()
