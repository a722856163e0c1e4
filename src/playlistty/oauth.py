"""Interactive OAuth authorization for both platforms.

The redirect is received by a short-lived local HTTP server. It lives only
inside :func:`receive_authorization_code`, hands over the first code it gets
through a one-slot queue and is shut down when the block exits.
"""

import queue
import secrets
import threading
import webbrowser
from contextlib import contextmanager
from dataclasses import dataclass
from http.server import BaseHTTPRequestHandler, HTTPServer
from typing import Callable, Iterator, Optional
from urllib.parse import parse_qs, urlencode, urlparse

import requests
from google_auth_oauthlib.flow import Flow

from .config import (
    AUTH_TIMEOUT,
    REDIRECT_PATH,
    REDIRECT_PORT,
    SPOTIFY_SCOPES,
    YOUTUBE_SCOPES,
    PlatformCredentials,
)
from .errors import AuthError, ConfigError
from .logging_config import get_logger

logger = get_logger(__name__)

SPOTIFY_AUTH_URL = "https://accounts.spotify.com/authorize"
SPOTIFY_TOKEN_URL = "https://accounts.spotify.com/api/token"
GOOGLE_AUTH_URL = "https://accounts.google.com/o/oauth2/auth"
GOOGLE_TOKEN_URL = "https://oauth2.googleapis.com/token"


@dataclass
class CallbackResult:
    """What the redirect delivered."""

    code: Optional[str] = None
    state: Optional[str] = None
    error: Optional[str] = None


class CallbackServer(HTTPServer):
    """HTTP server that accepts a single redirect."""

    def __init__(self, server_address, handler_class, callback_path: str = REDIRECT_PATH):
        super().__init__(server_address, handler_class)
        self.callback_path = callback_path
        self.results: "queue.Queue[CallbackResult]" = queue.Queue(maxsize=1)

    def wait_for_code(self, timeout: float = AUTH_TIMEOUT) -> CallbackResult:
        """Block until the redirect arrives.

        Raises:
            AuthError: If the redirect carried an error or nothing arrived in time
        """
        try:
            result = self.results.get(timeout=timeout)
        except queue.Empty:
            raise AuthError("Authorization timeout expired") from None
        if result.error:
            raise AuthError(f"Authorization error: {result.error}")
        return result


class CallbackHandler(BaseHTTPRequestHandler):
    """Pull ``code``/``state``/``error`` out of the redirect query string."""

    def do_GET(self):  # noqa: N802
        parsed = urlparse(self.path)
        if parsed.path != self.server.callback_path:
            self.send_response(404)
            self.end_headers()
            return

        params = parse_qs(parsed.query)
        result = CallbackResult(
            code=params.get("code", [None])[0],
            state=params.get("state", [None])[0],
            error=params.get("error", [None])[0],
        )
        if result.code is None and result.error is None:
            result.error = "no authorization code in redirect"

        try:
            self.server.results.put_nowait(result)
        except queue.Full:
            # Only the first redirect counts
            pass

        self.send_response(200)
        self.send_header("Content-Type", "text/plain")
        self.end_headers()
        if result.error:
            self.wfile.write(b"Authorization failed. You can close this window.")
        else:
            self.wfile.write(b"Authorization successful! You can close this window.")

    def log_message(self, format, *args):  # noqa: A002
        logger.debug("Callback server: " + format, *args)


def build_redirect_uri(port: int = REDIRECT_PORT, path: str = REDIRECT_PATH) -> str:
    return f"http://localhost:{port}{path}"


@contextmanager
def receive_authorization_code(
    port: int = REDIRECT_PORT, path: str = REDIRECT_PATH, host: str = "localhost"
) -> Iterator[Callable[[float], CallbackResult]]:
    """Listen for the OAuth redirect for the duration of the block.

    Yields:
        A ``wait_for_code(timeout)`` function returning the CallbackResult

    Raises:
        AuthError: If the listener cannot be bound
    """
    try:
        server = CallbackServer((host, port), CallbackHandler, path)
    except OSError as e:
        raise AuthError(f"Cannot listen on port {port}: {e}") from e
    thread = threading.Thread(target=server.serve_forever, daemon=True)
    thread.start()
    logger.debug("Listening for authorization redirect on %s:%d%s", host, port, path)
    try:
        yield server.wait_for_code
    finally:
        server.shutdown()
        server.server_close()
        thread.join()


def _prompt_user(url: str) -> None:
    logger.info("Opening browser for authorization...")
    logger.info("Please visit this URL to authorize: %s", url)
    webbrowser.open(url)


def _require_client(credentials: PlatformCredentials, service: str) -> None:
    if not credentials.client_id or not credentials.client_secret:
        raise ConfigError(f"{service} client_id and client_secret must be set in the config file")


def authorize_spotify(
    credentials: PlatformCredentials,
    port: int = REDIRECT_PORT,
    timeout: float = AUTH_TIMEOUT,
) -> str:
    """Run the Spotify authorization code flow.

    Returns:
        Access token

    Raises:
        ConfigError: If client credentials are missing
        AuthError: If authorization or the token exchange fails
    """
    _require_client(credentials, "spotify")
    redirect_uri = build_redirect_uri(port)
    state = secrets.token_urlsafe(16)
    params = {
        "client_id": credentials.client_id,
        "response_type": "code",
        "redirect_uri": redirect_uri,
        "scope": " ".join(SPOTIFY_SCOPES),
        "state": state,
    }

    with receive_authorization_code(port) as wait_for_code:
        _prompt_user(f"{SPOTIFY_AUTH_URL}?{urlencode(params)}")
        result = wait_for_code(timeout)

    if result.state != state:
        raise AuthError("Authorization state mismatch")

    data = {
        "grant_type": "authorization_code",
        "code": result.code,
        "redirect_uri": redirect_uri,
        "client_id": credentials.client_id,
        "client_secret": credentials.client_secret,
    }
    try:
        resp = requests.post(SPOTIFY_TOKEN_URL, data=data, timeout=30)
    except requests.RequestException as e:
        raise AuthError(f"Error exchanging code: {e}") from e
    if resp.status_code != 200:
        raise AuthError(f"Error exchanging code: {resp.status_code} {resp.text}")

    try:
        token = resp.json().get("access_token")
    except ValueError as e:
        raise AuthError(f"Error decoding token response: {e}") from e
    if not token:
        raise AuthError("Token response did not contain an access token")
    return token


def authorize_youtube(
    credentials: PlatformCredentials,
    port: int = REDIRECT_PORT,
    timeout: float = AUTH_TIMEOUT,
) -> str:
    """Run the Google authorization code flow for the YouTube scope.

    Returns:
        Access token

    Raises:
        ConfigError: If client credentials are missing
        AuthError: If authorization or the token exchange fails
    """
    _require_client(credentials, "youtube")
    redirect_uri = build_redirect_uri(port)
    client_config = {
        "installed": {
            "client_id": credentials.client_id,
            "client_secret": credentials.client_secret,
            "auth_uri": GOOGLE_AUTH_URL,
            "token_uri": GOOGLE_TOKEN_URL,
            "redirect_uris": [redirect_uri],
        }
    }
    flow = Flow.from_client_config(client_config, scopes=YOUTUBE_SCOPES, redirect_uri=redirect_uri)
    auth_url, state = flow.authorization_url(access_type="offline", prompt="consent")

    with receive_authorization_code(port) as wait_for_code:
        _prompt_user(auth_url)
        result = wait_for_code(timeout)

    if result.state != state:
        raise AuthError("Authorization state mismatch")

    try:
        flow.fetch_token(code=result.code)
    except Exception as e:
        raise AuthError(f"Error exchanging code: {e}") from e
    return flow.credentials.token
