"""
CampusHub – SQLAlchemy ORM models package.

Imports all model classes so the app can discover them through a single
``import campushub.models``.
"""

from campushub.models.profile import Profile, RoleEnum    # noqa: F401
from campushub.models.endorsement import Endorsement      # noqa: F401
