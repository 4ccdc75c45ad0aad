"""
Constantes de la API de datos abiertos de turismo (Korea Tourism Organization).
Endpoints, parámetros fijos de consulta y códigos de sub-región.

Fuente: https://apis.data.go.kr/B551011
"""

# ============================================================================
# HOST Y PARÁMETROS FIJOS
# ============================================================================

BASE_URL = "https://apis.data.go.kr"

MOBILE_OS = "ETC"
MOBILE_APP = "AppTest"
RESPONSE_TYPE = "json"

# Mes base de las estadísticas (YYYYMM)
BASE_YM = "202503"

NUM_OF_ROWS = 100

DEFAULT_RESULT_CODE = "00"
DEFAULT_RESULT_MSG = "NORMAL SERVICE"

# ============================================================================
# ENDPOINTS
# ============================================================================

# Turismo centrado en gobiernos locales (기초지자체 중심 관광지)
BASIC_TOUR_PATH = "B551011/LocgoHubTarService1/areaBasedList1"

# Atracciones relacionadas por atracción (관광지별 연관 관광지)
RELATED_TOUR_PATH = "B551011/TarRlteTarService1/areaBasedList1"

# Rutas de senderismo Durunubi
DURUNUBI_PATH = "B551011/Durunubi/routeList"

# Ecoturismo (생태관광)
GREEN_TOUR_PATH = "B551011/GreenTourService1/areaBasedList1"

# ============================================================================
# SUB-REGIONES (시군구코드) - Gyeongsangbuk-do
# ============================================================================

SIGNGU_CD_LIST = [
    "47111",
    "47113",
    "47130",
    "47150",
    "47170",
    "47190",
    "47210",
    "47230",
    "47250",
    "47280",
    "47290",
    "47730",
    "47750",
    "47760",
    "47770",
    "47820",
    "47830",
    "47840",
    "47850",
    "47900",
    "47920",
    "47930",
    "47940",
]
