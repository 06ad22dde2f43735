from flask import session

CURRENT_USER = "currentUser"
CURRENT_ARTICLE = "currentArticle"
EDITING_ARTICLE_ID = "editingArticleId"
CURRENT_FILTER = "currentFilter"
SEARCH_TERM = "searchTerm"

# yang dihapus saat logout; filter & pencarian tetap diingat
AUTH_KEYS = (CURRENT_USER, EDITING_ARTICLE_ID)


def remember(key: str, value):
    session[key] = value


def recall(key: str, default=None):
    return session.get(key, default)


def forget(key: str):
    session.pop(key, None)


def clear_auth():
    for key in AUTH_KEYS:
        session.pop(key, None)


def on_identity_changed(sender, profile=None, **extra):
    if profile is None:
        clear_auth()
    else:
        remember(CURRENT_USER, profile.to_session())
