from enum import Enum as PyEnum


class SportSkill(str, PyEnum):
    snowboarding = "snowboarding"
    skiing = "skiing"
