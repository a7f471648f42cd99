import logging
from datetime import datetime, timedelta

from salon_agenda.engine import create_scheduling_engine
from salon_agenda.utils.logger import setup_logger

logger = setup_logger("run")

# Equipe de demonstração
DEMO_SPECIALISTS = [
    {"id": "1", "name": "Anna", "role": "Stylist", "color": "#6B2737"},
    {"id": "2", "name": "Marta", "role": "Junior Stylist", "color": "#E08E45"},
    {"id": "3", "name": "Kate", "role": "Manager", "color": "#3943B7"},
]

if __name__ == '__main__':
    try:
        engine = create_scheduling_engine(specialists=DEMO_SPECIALISTS)
        now = datetime.now(engine.resolver.tz).replace(tzinfo=None)

        for specialist in engine.specialists:
            next_slot = engine.find_next_available_slot(specialist.id, now, 60)
            logger.info(f"{specialist.name}: próximo horário de 60 min -> {next_slot}")

        for slot in engine.find_available_slots(now + timedelta(days=1), 30):
            logger.info(f"Livre: {slot.date} {slot.start_time}-{slot.end_time} (profissional {slot.specialist_id})")
    except Exception as e:
        logging.error(f"Erro de configuração: {e}")
