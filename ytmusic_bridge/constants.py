"""Constants for the YouTube Music bridge."""

from typing import Final

LOGGER_NAME: Final[str] = "ytmusic_bridge"
VERBOSE_LOG_LEVEL: Final[int] = 5
APPLICATION_NAME: Final[str] = "ytmusic-bridge"

# API URLs
BASE_URL = "https://music.youtube.com"
INNERTUBE_URL = f"{BASE_URL}/youtubei/v1"
ACCOUNT_SWITCHER_URL = f"{BASE_URL}/getAccountSwitcherEndpoint"
ORIGIN = BASE_URL

# Innertube clients
CLIENT_NAME = "WEB_REMIX"
CLIENT_VERSION = "1.20241023.01.00"
PLAYER_CLIENT_NAME = "IOS_MUSIC"
PLAYER_CLIENT_VERSION = "7.27.0"
PLAYER_USER_AGENT = "com.google.ios.youtubemusic/7.27.0 (iPhone16,2; U; CPU iOS 18_1 like Mac OS X)"

# Display strings are requested in English so shelf titles can double as keys
LANGUAGE = "en-GB"
SINGLES = "Singles"
UNKNOWN = "Unknown"

# Synthetic "liked songs" container, never listed as a regular playlist
LIKED_SONGS_ID = "VLSE"
PLAYLIST_BROWSE_PREFIX = "VL"

# Track ids without a thumbnail get one derived from these templates
TRACK_THUMBNAIL_LOW = "https://img.youtube.com/vi/{track_id}/mqdefault.jpg"
TRACK_THUMBNAIL_HIGH = "https://img.youtube.com/vi/{track_id}/maxresdefault.jpg"

# Anti-XSSI prefix in front of the account switcher JSON
XSSI_PREFIX = ")]}'"

# Extras keys
EXTRA_RELATED_ID = "relatedId"
EXTRA_LYRICS_ID = "lyricsId"
EXTRA_SET_ID = "setId"
EXTRA_ITEM_SET_IDS = "itemSetIds"
EXTRA_SUB_ID = "subId"
EXTRA_COOKIE = "cookie"
EXTRA_AUTH = "auth"

# Playlist relatedId values carrying this prefix point at a track instead of a cursor
TRACK_REDIRECT_PREFIX = "id://"

MUSIC_VIDEO_TYPE_ATV = "MUSIC_VIDEO_TYPE_ATV"

# Params for the "songs" search filter
SONGS_SEARCH_PARAMS = "EgWKAQIIAWoSEAMQBBAJEA4QChAFEBEQEBAV"

# Browse ids
HOME_BROWSE_ID = "FEmusic_home"
LIBRARY_LANDING_ID = "FEmusic_library_landing"
LIBRARY_PLAYLISTS_ID = "FEmusic_liked_playlists"
LIBRARY_TABS: Final[tuple[tuple[str, str], ...]] = (
    (LIBRARY_LANDING_ID, "All"),
    ("FEmusic_history", "History"),
    (LIBRARY_PLAYLISTS_ID, "Playlists"),
    ("FEmusic_liked_videos", "Songs"),
    ("FEmusic_library_corpus_track_artists", "Artists"),
)
ALL_TAB_ID = "All"

# Login
LOGIN_INITIAL_URL = (
    "https://accounts.google.com/v3/signin/identifier?continue="
    "https%3A%2F%2Fwww.youtube.com%2Fsignin%3Faction_handle_signin%3Dtrue%26app%3Ddesktop"
    "%26hl%3Den-GB%26next%3Dhttps%253A%252F%252Fmusic.youtube.com%252F%253Fcbrd%253D1"
    "&hl=en-GB&ltmpl=music&passive=true&service=youtube&uilel=3"
    "&flowName=GlifWebSignIn&flowEntry=ServiceLogin"
)
LOGIN_STOP_URL_REGEX = r"https://music\.youtube\.com/.*"

# Config keys
CONF_HIGH_QUALITY = "high_quality"
CONF_USE_MP4_FORMAT = "use_mp4_format"
CONF_RESOLVE_MUSIC_FOR_VIDEOS = "resolve_music_for_videos"
CONF_VISITOR_ID = "visitor_id"

# Share links
SHARE_TRACK_URL = f"{BASE_URL}/watch?v={{item_id}}"
SHARE_ALBUM_URL = f"{BASE_URL}/browse/{{item_id}}"
SHARE_PLAYLIST_URL = f"{BASE_URL}/playlist?list={{item_id}}"
SHARE_CHANNEL_URL = f"{BASE_URL}/channel/{{item_id}}"
