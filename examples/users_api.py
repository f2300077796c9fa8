"""Grouped users API — two versions behind shared middleware.

Run with any ASGI server::

    uvicorn examples.users_api:mux --reload
"""

import logging

from perch import ANY_METHOD, Request, ServeMux, bind_routes_to_mux, new_group, new_handler
from perch.middleware import CORSConfig, CORSMiddleware, RecoveryMiddleware, enforce_json

logging.basicConfig(level=logging.DEBUG)

USERS = {1: {"id": 1, "name": "ada"}, 2: {"id": 2, "name": "grace"}}


async def list_users(request: Request) -> list:
    return list(USERS.values())


async def show_user(request: Request):
    user = USERS.get(int(request.path_params["id"]))
    if user is None:
        return "user not found", 404
    return user


async def create_user(request: Request):
    payload = await request.json()
    user_id = max(USERS) + 1
    USERS[user_id] = {"id": user_id, **payload}
    return USERS[user_id], 201, {"Location": f"/api/v1/users/{user_id}"}


recovery = RecoveryMiddleware(logging.getLogger("users_api"))
cors = CORSMiddleware(CORSConfig(allow_origins=("*",)))

users_v1 = new_group(
    {
        "/api/v1/users": {
            "": {
                "GET": new_handler(list_users),
                "POST": new_handler(create_user, enforce_json),
            },
            "/{id:int}": {"GET": new_handler(show_user)},
        }
    },
    recovery,
)

users_v2 = new_group({"/api/v2": {"/users": {ANY_METHOD: new_handler(list_users)}}}, cors, recovery)

mux = ServeMux()
bind_routes_to_mux(mux, users_v1, users_v2)
