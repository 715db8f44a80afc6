"""Internal constants shared across the library."""

DEFAULT_INSTANT_PATH = "/interfaces/ura/instant_V1"
DEFAULT_STREAM_PATH = "/interfaces/ura/stream_V1"
USER_AGENT = "pyura"

# ------------------------------------------------------------------
# Wire record discriminators (first element of every line)
# ------------------------------------------------------------------

RES_TYPE_STOP = 0
RES_TYPE_PREDICTION = 1
RES_TYPE_FLEX_MESSAGE = 2
RES_TYPE_URA_VERSION = 4

# ------------------------------------------------------------------
# Query parameter names
# ------------------------------------------------------------------

PAR_STOP_ID = "StopID"
PAR_STOP_NAME = "StopPointName"
PAR_STOP_STATE = "StopPointState"
PAR_STOP_INDICATOR = "StopPointIndicator"
PAR_GEOLOCATION = "Latitude,Longitude"
PAR_VISIT_NUMBER = "VisitNumber"
PAR_LINE_ID = "LineID"
PAR_LINE_NAME = "LineName"
PAR_DIR_ID = "DirectionID"
PAR_DEST_NAME = "DestinationName"
PAR_DEST_TEXT = "DestinationText"
PAR_VEHICLE_ID = "VehicleID"
PAR_TRIP_ID = "TripID"
PAR_ESTTIME = "EstimatedTime"
PAR_TOWARDS = "Towards"
PAR_CIRCLE = "Circle"
PAR_MSG_UUID = "MessageUUID"
PAR_MSG_TYPE = "MessageType"
PAR_MSG_PRIORITY = "MessagePriority"
PAR_MSG_TEXT = "MessageText"
PAR_RETURN_LIST = "ReturnList"

# Field order requested from the server; must match the positional layout
# expected by the record decoder.
REQUEST_STOP: tuple[str, ...] = (
    PAR_STOP_NAME,
    PAR_STOP_ID,
    PAR_STOP_INDICATOR,
    PAR_STOP_STATE,
    PAR_GEOLOCATION,
)
REQUEST_TRIP: tuple[str, ...] = (
    *REQUEST_STOP,
    PAR_VISIT_NUMBER,
    PAR_LINE_ID,
    PAR_LINE_NAME,
    PAR_DIR_ID,
    PAR_DEST_NAME,
    PAR_DEST_TEXT,
    PAR_VEHICLE_ID,
    PAR_TRIP_ID,
    PAR_ESTTIME,
)
REQUEST_MESSAGE: tuple[str, ...] = (
    *REQUEST_STOP,
    PAR_MSG_UUID,
    PAR_MSG_TYPE,
    PAR_MSG_PRIORITY,
    PAR_MSG_TEXT,
)
