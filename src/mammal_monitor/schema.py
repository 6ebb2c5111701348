# src/mammal_monitor/schema.py

# Raw column names as they appear in the detections CSV (case and spacing matter)
RAW_YEAR = "Year"
RAW_COMMON_NAME = "common_name"
RAW_START_TIME = "start_time"
RAW_END_TIME = "end_time"
RAW_GROUP_SIZE = "group_size"
RAW_LATITUDE = "Latitude"
RAW_LONGITUDE = "Longitude"
RAW_REGION = "Region"
RAW_ARRAY_NAME = "Array Name"
RAW_SEQUENCE_ID = "sequence_id"
RAW_DEPLOYMENT_ID = "deployment_id"

RAW_COLUMNS = [
    RAW_YEAR, "identified_by", "class", "order", "family", "genus", "species",
    RAW_COMMON_NAME, RAW_START_TIME, RAW_END_TIME, RAW_GROUP_SIZE, "age", "sex",
    RAW_LATITUDE, RAW_LONGITUDE, RAW_REGION, RAW_ARRAY_NAME,
    RAW_SEQUENCE_ID, RAW_DEPLOYMENT_ID,
]

# Normalized detection columns
YEAR_COL = "year"
SPECIES_COL = "common_name"
START_COL = "start_time"
GROUP_SIZE_COL = "group_size"
LAT_COL = "latitude"
LON_COL = "longitude"
HOUR_COL = "hour"
MONTH_COL = "month"
REGION_COL = "region"
ARRAY_COL = "array_name"
SEQUENCE_COL = "sequence_id"
DEPLOYMENT_COL = "deployment_id"

DETECTION_COLUMNS = [
    YEAR_COL, SPECIES_COL, START_COL, GROUP_SIZE_COL, LAT_COL, LON_COL,
    HOUR_COL, MONTH_COL, REGION_COL, ARRAY_COL, SEQUENCE_COL, DEPLOYMENT_COL,
]

# Pass-through string fields: raw -> normalized
PASSTHROUGH = {
    RAW_REGION: REGION_COL,
    RAW_ARRAY_NAME: ARRAY_COL,
    RAW_SEQUENCE_ID: SEQUENCE_COL,
    RAW_DEPLOYMENT_ID: DEPLOYMENT_COL,
}

# Filterable dimensions
DIMENSIONS = {
    "species": SPECIES_COL,
    "region": REGION_COL,
    "array": ARRAY_COL,
}

BLANK_SPECIES = "Blank"

MONTH_NAMES = ["Jan", "Feb", "Mar", "Apr", "May", "Jun",
               "Jul", "Aug", "Sep", "Oct", "Nov", "Dec"]
