from .supervisions import Supervision
from .teaching_administration import TeachingAdministration
