"""Sign-in and sign-up flows: call the API, then record the result in the auth store."""

from typing import Optional

import requests

from app.client.api import ApiClient, ApiError
from app.client.auth_store import AuthStore, AuthUser


def _store_auth(auth_store: AuthStore, data: dict) -> AuthUser:
    user = AuthUser(id=data["id"], email=data["email"], name=data["name"])
    auth_store.login(user, data["token"])
    return user


def login_and_store(api: ApiClient, auth_store: AuthStore, email: str, password: str) -> Optional[AuthUser]:
    auth_store.set_is_loading(True)
    auth_store.set_error(None)
    try:
        response = api.login(email, password)
        return _store_auth(auth_store, response["data"])
    except ApiError as e:
        auth_store.set_error(e.message or "Login failed")
    except requests.RequestException:
        auth_store.set_error("An error occurred while logging in")
    finally:
        auth_store.set_is_loading(False)
    return None


def register_and_store(
    api: ApiClient, auth_store: AuthStore, email: str, password: str, name: str,
) -> Optional[AuthUser]:
    auth_store.set_is_loading(True)
    auth_store.set_error(None)
    try:
        response = api.register(email, password, name)
        return _store_auth(auth_store, response["data"])
    except ApiError as e:
        auth_store.set_error(e.message or "Registration failed")
    except requests.RequestException:
        auth_store.set_error("An error occurred while registering")
    finally:
        auth_store.set_is_loading(False)
    return None
