# Names of the persisted keys. Values are JSON-compatible structures.

ALL_ORDERS_KEY = "allOrders"  # list of Order dicts, insertion order
CUSTOM_HOSPITALS_KEY = "customHospitals"  # list of Hospital dicts (isCustom flag)
USER_KEY = "user"  # {"email"/"name", "phone"}
IS_LOGGED_IN_KEY = "isLoggedIn"  # "true" when a demo session is open
CURRENT_ORDER_KEY = "currentOrder"  # last created Order (booking -> tracking hand-off)
