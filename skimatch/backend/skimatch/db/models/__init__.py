from .skill import SportSkill
from .single_listing import SingleListing
from .recurrence_rule import RecurrenceRule
from .recurrence_exclusion import RecurrenceExclusion
