# flagquiz/domain/entities/country.py
from dataclasses import dataclass
from typing import List


@dataclass(frozen=True)
class Country:
    name: str
    code: str
    flag_image_url: str
    is_eligible: bool = True


@dataclass
class Question:
    prompt_id: str
    image_url: str
    choices: List[str]
    correct_index: int
