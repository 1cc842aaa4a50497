"""
Endpoint paths, header names and shared literals.
"""

# Endpoints
LOGIN = "/userlogin.html"
LOGOUT = "/logout"
DEVICE_INFO = "/Device/DeviceInfo"
DEVICE_CAPABILITIES = "/Device/DeviceCapabilities"
SYSTEM_VERSIONS = "/Device/SystemVersions"
NETWORK_ADAPTERS = "/Device/NetworkAdapters"
DISPLAY = "/Device/Display"

# Headers
CREST_XSRF_TOKEN_HEADER = "CREST-XSRF-TOKEN"
X_CREST_XSRF_TOKEN_HEADER = "X-CREST-XSRF-TOKEN"

# Formats and values
PROPERTY_FORMAT = "{}#{}"
NOT_AVAILABLE = "N/A"
ON = "On"
OFF = "Off"
YES = "Yes"
NO = "No"
DEFAULT_INTERVAL_MS = 30_000

# Groups
ALL_GROUPS = "All"
GENERAL_GROUP = "General"
ADAPTER_METADATA_GROUP = "AdapterMetadata"
CAPABILITIES_GROUP = "Capabilities"
DISPLAY_GROUP = "Display"
NETWORK_GROUP = "Network"
SYSTEM_VERSIONS_GROUP = "SystemVersions"
SUPPORTED_GROUPS = (
    GENERAL_GROUP,
    CAPABILITIES_GROUP,
    DISPLAY_GROUP,
    NETWORK_GROUP,
    SYSTEM_VERSIONS_GROUP,
)

# Display sub-groups, used as property name prefixes
LCD_DISPLAY_GROUP = "LCD"
AUDIO_DISPLAY_GROUP = "Audio"
BUTTON_TOOLBAR_DISPLAY_GROUP = "ButtonToolbar"

LOGIN_FAILED = "Failed to login, please check the credentials"
