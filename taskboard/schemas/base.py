from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel

# wire format is camelCase, python side stays snake_case
class ApiModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, from_attributes=True)
