"""Aggregate model imports for Alembic auto-detection."""

# Accounts
from fastcfs.models.user import User, UserRole  # noqa: F401

# Cargo tracking
from fastcfs.models.cargo import Cargo, CargoStatus  # noqa: F401
from fastcfs.models.flight_segment import CargoFlightSegment  # noqa: F401
from fastcfs.models.status_history import CargoStatusHistory  # noqa: F401

# Website content
from fastcfs.models.branch import Branch  # noqa: F401
from fastcfs.models.blog_post import BlogPost  # noqa: F401
from fastcfs.models.testimonial import Testimonial  # noqa: F401
from fastcfs.models.seo_setting import SeoSetting  # noqa: F401
from fastcfs.models.faq import Faq  # noqa: F401
from fastcfs.models.contact_submission import ContactSubmission  # noqa: F401
