from .iam import (
    UserType as UserType,
    user_project_association as user_project_association,
    User as User,
    Email as Email,
    Project as Project,
)

from .components import (
    Component as Component,
    Release as Release,
)
