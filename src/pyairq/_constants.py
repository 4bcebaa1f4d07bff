"""Internal constants shared across the library."""

HEADER_BYTE = 0xAA
DEVICE_LABEL_PREFIX = "Device"

# ------------------------------------------------------------------
# Field widths (bytes)
# ------------------------------------------------------------------

HEADER_LEN = 1
DEVICE_ID_LEN = 2
UUID_LEN = 16
SENSOR_VALUE_LEN = 2
TIMESTAMP_LEN = 6
LATITUDE_LEN = 11
LONGITUDE_LEN = 12
SIGNATURE_LEN = 64
PUBLIC_KEY_LEN = 32

# ------------------------------------------------------------------
# Offsets shared by both frame revisions
# ------------------------------------------------------------------

DEVICE_ID_OFFSET = HEADER_LEN  # 1
UUID_OFFSET = DEVICE_ID_OFFSET + DEVICE_ID_LEN  # 3
PM10_OFFSET = UUID_OFFSET + UUID_LEN  # 19
PM25_OFFSET = PM10_OFFSET + SENSOR_VALUE_LEN  # 21

# Revised (detached signature) layout only
HUMIDITY_OFFSET = PM25_OFFSET + SENSOR_VALUE_LEN  # 23
TEMPERATURE_OFFSET = HUMIDITY_OFFSET + SENSOR_VALUE_LEN  # 25
TIMESTAMP_OFFSET = TEMPERATURE_OFFSET + SENSOR_VALUE_LEN  # 27
LATITUDE_OFFSET = TIMESTAMP_OFFSET + TIMESTAMP_LEN  # 33
LONGITUDE_OFFSET = LATITUDE_OFFSET + LATITUDE_LEN  # 44

INLINE_MESSAGE_LEN = PM25_OFFSET + SENSOR_VALUE_LEN  # 23
DETACHED_MESSAGE_LEN = LONGITUDE_OFFSET + LONGITUDE_LEN  # 56

# ------------------------------------------------------------------
# Sensor value scaling
# ------------------------------------------------------------------

PM_CLAMP = 9999
VALUE_SCALE = 10.0
SIGN_BIT = 0x80
MAGNITUDE_MASK = 0x7F
