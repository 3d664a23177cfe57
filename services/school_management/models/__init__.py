from .schools import School
from .teachers import Teacher, TeacherAccount, TeacherRank, EmploymentType, Gender
