"""Services

Services open their own database sessions and return plain dictionaries,
or None when the user or record does not exist.
"""

from cv_composer.services.completion import get_profile_completion
from cv_composer.services.cv_documents import (
    create_cv_document,
    delete_cv_document,
    get_cv_document,
    get_cv_layout,
    list_cv_documents,
    set_cv_layout,
    update_cv_document,
)
from cv_composer.services.share_links import (
    create_share_link,
    delete_share_link,
    list_share_links,
    update_share_link,
)
from cv_composer.services.user_profile import (
    delete_user_profile,
    get_user_profile,
    upsert_user_profile,
)
from cv_composer.services.users import create_user, get_user_id

__all__ = [
    "create_cv_document",
    "create_share_link",
    "create_user",
    "delete_cv_document",
    "delete_share_link",
    "delete_user_profile",
    "get_cv_document",
    "get_cv_layout",
    "get_profile_completion",
    "get_user_id",
    "get_user_profile",
    "list_cv_documents",
    "list_share_links",
    "set_cv_layout",
    "update_cv_document",
    "update_share_link",
    "upsert_user_profile",
]
