from .listing import SingleListing, SingleListingCreate
from .recurring import (
    RecurrenceRule,
    RecurrenceRuleCreate,
    RecurringAvailabilityCreate,
    RecurringAvailabilityEntry,
)
from .exclusion import Exclusion, ExclusionCreate
from .availability import AvailabilitySlot, CalendarDay, TeacherAvailability, TeacherDay
