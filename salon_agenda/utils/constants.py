# salon_agenda/utils/constants.py

# Mapeamento do dia da semana (weekday) para a chave do horário semanal
WEEKDAY_MAP = {
    0: "monday",
    1: "tuesday",
    2: "wednesday",
    3: "thursday",
    4: "friday",
    5: "saturday",
    6: "sunday"
}

WEEKDAY_NAMES = tuple(WEEKDAY_MAP.values())

# Regras de Negócio do Salão (modelo semanal padrão)
DEFAULT_SALON_SCHEDULE = {
    "monday": {"is_open": True, "hours": [{"open_time": "09:00", "close_time": "19:00"}]},
    "tuesday": {"is_open": True, "hours": [{"open_time": "09:00", "close_time": "19:00"}]},
    "wednesday": {"is_open": True, "hours": [{"open_time": "09:00", "close_time": "19:00"}]},
    "thursday": {"is_open": True, "hours": [{"open_time": "09:00", "close_time": "19:00"}]},
    "friday": {"is_open": True, "hours": [{"open_time": "09:00", "close_time": "19:00"}]},
    "saturday": {"is_open": True, "hours": [{"open_time": "10:00", "close_time": "14:00"}]}, # Sábado mais curto
    "sunday": {"is_open": False, "hours": []}, # Fechado
}

# Busca de horários
SLOT_STEP_MINUTES = 15
MAX_SLOT_RESULTS = 12       # limite da lista exibida no seletor de horários
SEARCH_HORIZON_DAYS = 7
ANY_SPECIALIST = "any"

# Linha do tempo (visão diária)
HOUR_HEIGHT = 120           # px por hora
TIMELINE_START_HOUR = 0
GRID_START_HOUR = 8
GRID_END_HOUR = 20
GRID_SLOT_MINUTES = 30

# Estatísticas
OFF_DAYS_LOOK_AHEAD_DAYS = 14
NEXT_UP_LIMIT = 4
UNKNOWN_SPECIALIST_NAME = "—"
UNKNOWN_SPECIALIST_COLOR = "#94a3b8"

# Rótulos do gráfico de tendência
TREND_WEEKDAY_LABELS = ("Mon", "Tue", "Wed", "Thu", "Fri", "Sat", "Sun")
TREND_MONTH_LABELS = ("Jan", "Feb", "Mar", "Apr", "May", "Jun", "Jul", "Aug", "Sep", "Oct", "Nov", "Dec")
