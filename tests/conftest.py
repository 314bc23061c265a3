"""
Shared pytest fixtures.
"""
import pytest

from interlinear.configuration import InterlinearConfig
from interlinear.languages import get_language


@pytest.fixture
def settings():
    """Settings with the configuration defaults, read from no source at all."""
    return InterlinearConfig.model_construct()


@pytest.fixture
def english():
    return get_language("English")


@pytest.fixture
def french():
    return get_language("France")


@pytest.fixture
def short_translation():
    """A response that fits on one wrapped block."""
    return "🇫🇷 [Je] [pense] [faire]\n🇬🇧 [I] [think] [to do]"


@pytest.fixture
def long_translation():
    """A ten-pair response that needs three blocks at the default width."""
    return (
        "🇬🇧 [The] [quick] [brown] [fox] [jumps] [over] [the] [lazy] [dog] [today]\n"
        "🇫🇷 [Le] [rapide] [brun] [renard] [saute] [par-dessus] [le] "
        "[paresseux] [chien] [aujourd'hui]\n"
    )
