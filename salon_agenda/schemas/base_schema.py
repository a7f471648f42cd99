# salon_agenda/schemas/base_schema.py
from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class AgendaRecord(BaseModel):
    """
    Base dos registros da agenda.

    Aceita tanto os nomes em snake_case quanto as chaves camelCase do JSON da
    interface (ex: ``startTime``) e é imutável: o motor nunca altera um registro.
    """

    model_config = ConfigDict(
        alias_generator=to_camel
        , populate_by_name=True
        , frozen=True)
