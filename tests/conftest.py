import io

import pytest
from rich.console import Console

from spotify_oauth import Credential, TokenStorage


@pytest.fixture
def console() -> Console:
    return Console(file=io.StringIO(), width=120, force_terminal=False)


@pytest.fixture
def storage(tmp_path) -> TokenStorage:
    return TokenStorage(tmp_path / "spotifyfetch" / "tokens.json")


@pytest.fixture
def credential() -> Credential:
    return Credential(
        access_token="access-token-xyz",
        refresh_token="refresh-token-abc",
        expires_at=1_700_003_600,
    )
