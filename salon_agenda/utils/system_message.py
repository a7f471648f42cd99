# salon_agenda/utils/system_message.py
# =====================================================================================================
#                                  MENSAGENS DE DIAGNÓSTICO DE AGENDA
# =====================================================================================================
AVAILABLE = 'Horário disponível para agendamento.'
INVALID_INTERVAL = 'Intervalo inválido: o início deve ser anterior ao fim.'
SALON_CLOSED = 'O salão está fechado nesse horário.'
SPECIALIST_OFF_DAY = 'O(a) profissional {nome} está de folga em {data}.'
SPECIALIST_NOT_WORKING = 'O(a) profissional {nome} não atende na(o) {dia}.'
OUTSIDE_SPECIALIST_HOURS = 'O horário está fora do expediente de {nome}.'
VISIT_CONFLICT = 'Horário indisponível. Conflito com a visita {visita}.'
UNKNOWN_SPECIALIST = 'Profissional não encontrado(a); considerando apenas o horário do salão.'

MESSAGES = {
    'AVAILABLE': AVAILABLE,
    'INVALID_INTERVAL': INVALID_INTERVAL,
    'SALON_CLOSED': SALON_CLOSED,
    'SPECIALIST_OFF_DAY': SPECIALIST_OFF_DAY,
    'SPECIALIST_NOT_WORKING': SPECIALIST_NOT_WORKING,
    'OUTSIDE_SPECIALIST_HOURS': OUTSIDE_SPECIALIST_HOURS,
    'VISIT_CONFLICT': VISIT_CONFLICT,
    'UNKNOWN_SPECIALIST': UNKNOWN_SPECIALIST,
}
