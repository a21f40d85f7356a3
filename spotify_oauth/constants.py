"""
Spotify OAuth constants
"""

# OAuth Configuration
CLIENT_ID = "ebdbdb22841c48648acf563e594d928e"
AUTHORIZE_URL = "https://accounts.spotify.com/authorize"
TOKEN_URL = "https://accounts.spotify.com/api/token"
REDIRECT_URI = "http://localhost:8888/callback"
SCOPES = ["user-top-read"]

# OAuth callback server
OAUTH_CALLBACK_TIMEOUT = 300

# A credential this close to expiry is refreshed before use
EXPIRY_MARGIN_SECONDS = 60
