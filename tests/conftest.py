"""Pytest configuration and fixtures."""


import pytest


SAMPLE_MIX_EXS = """defmodule MyApp.MixProject do
  use Mix.Project

  def project do
    [
      app: :my_app,
      version: "0.1.0",
      deps: deps()
    ]
  end

  # Run "mix help deps" to learn about dependencies.
  defp deps do
    [
      {:phoenix, "~> 1.7.0"},
      {:pow, "1.0.0"},
      {:credo, "~> 1.6", only: [:dev, :test], runtime: false}
    ]
  end
end
"""


@pytest.fixture
def sample_mix_exs():
    """Sample mix.exs content for testing."""
    return SAMPLE_MIX_EXS


@pytest.fixture
def sample_deps_output():
    """Sample `mix deps` output for testing."""
    return """* credo 1.6.7 (Hex package) (mix)
  locked at 1.6.7 (credo) 915d93ab
  ok
* phoenix 1.7.2 (Hex package) (mix)
  locked at 1.7.2 (phoenix) 3a9ec4c1
  ok
* pow 1.0.0 (Hex package) (mix)
  locked at 1.0.0 (pow) 0cc0a9b5
  ok
"""


@pytest.fixture
def mix_project(tmp_path):
    """Create a temporary Mix project directory with a mix.exs file."""
    (tmp_path / "mix.exs").write_text(SAMPLE_MIX_EXS)
    return tmp_path
