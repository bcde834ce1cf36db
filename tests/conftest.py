"""Shared pytest fixtures for the Service Maker test suite.

Provides reusable fixtures for:
- A temporary Laravel ``app/`` directory and its configuration
- Sample ``AppServiceProvider`` documents
- Captured Rich console output
"""

from __future__ import annotations

import io
from pathlib import Path

import pytest
from rich.console import Console

from service_maker.config import Config


# ---------------------------------------------------------------------------
# Provider documents
# ---------------------------------------------------------------------------

LARAVEL_PROVIDER = r"""<?php

namespace App\Providers;

use Illuminate\Support\ServiceProvider;

class AppServiceProvider extends ServiceProvider
{
    /**
     * Register any application services.
     */
    public function register(): void
    {
        //
    }

    /**
     * Bootstrap any application services.
     */
    public function boot(): void
    {
        //
    }
}
"""

EMPTY_REGISTER_PROVIDER = r"""<?php

namespace App\Providers;

class AppServiceProvider extends ServiceProvider
{
    public function register() {
    }
}
"""

NESTED_BRACES_PROVIDER = r"""<?php

namespace App\Providers;

use Illuminate\Support\ServiceProvider;

class AppServiceProvider extends ServiceProvider
{
    public function register(): void
    {
        $this->app->bind(Clock::class, function ($app) {
            if ($app->isLocal()) {
                return new Clock('{');
            }
            return new Clock("}");
        });
        // a stray } in a comment
    }

    public function boot(): void
    {
        //
    }
}
"""


@pytest.fixture
def laravel_provider() -> str:
    """Stock Laravel 11 ``AppServiceProvider``."""
    return LARAVEL_PROVIDER


@pytest.fixture
def empty_register_provider() -> str:
    """Provider whose ``register()`` body is empty."""
    return EMPTY_REGISTER_PROVIDER


@pytest.fixture
def nested_braces_provider() -> str:
    """Provider whose ``register()`` body holds nested and quoted braces."""
    return NESTED_BRACES_PROVIDER


# ---------------------------------------------------------------------------
# Application layout
# ---------------------------------------------------------------------------

@pytest.fixture
def app_dir(tmp_path: Path) -> Path:
    """Temporary Laravel ``app/`` directory (auto-cleanup)."""
    path = tmp_path / "app"
    path.mkdir()
    yield path


@pytest.fixture
def config(app_dir: Path) -> Config:
    """Configuration pointing at the temporary ``app/`` directory."""
    return Config(app_path=app_dir)


@pytest.fixture
def provider_path(config: Config, laravel_provider: str) -> Path:
    """The stock provider written to ``app/Providers/AppServiceProvider.php``."""
    path = config.provider_path
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(laravel_provider, encoding="utf-8")
    return path


# ---------------------------------------------------------------------------
# Console output
# ---------------------------------------------------------------------------

@pytest.fixture
def captured_console(monkeypatch) -> io.StringIO:
    """Redirect the shared Rich console into a buffer.

    Usage:
        def test_something(captured_console):
            print_success("done")
            assert "done" in captured_console.getvalue()
    """
    buffer = io.StringIO()
    monkeypatch.setattr(
        "service_maker.utils.console",
        Console(file=buffer, width=200, color_system=None),
    )
    return buffer
