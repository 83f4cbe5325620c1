"""Query and mutation resolvers for users and login."""
from __future__ import annotations

from ariadne import MutationType, QueryType
from starlette.concurrency import run_in_threadpool

from catapi.schemas import Credentials, UserCreate, UserModify, parse_input

query = QueryType()
mutation = MutationType()


def _users(info):
    return info.context["user_service"]


def _caller(info):
    return info.context.get("user")


@query.field("users")
async def resolve_users(_obj, info):
    return await run_in_threadpool(_users(info).list_users)


@query.field("userById")
async def resolve_user_by_id(_obj, info, id):
    return await run_in_threadpool(_users(info).get_user, id)


@query.field("checkToken")
async def resolve_check_token(_obj, info):
    return {"message": "Token is valid", "user": _users(info).check_token(_caller(info))}


@mutation.field("login")
async def resolve_login(_obj, info, credentials):
    data = parse_input(Credentials, credentials)
    result = await run_in_threadpool(info.context["auth_service"].login, data)
    return {"message": result.message, "token": result.token, "user": result.user}


@mutation.field("register")
async def resolve_register(_obj, info, user):
    created = await run_in_threadpool(_users(info).create_user, parse_input(UserCreate, user))
    return {"message": "User created", "user": created}


@mutation.field("updateUser")
async def resolve_update_user(_obj, info, user):
    data = parse_input(UserModify, user)
    updated = await run_in_threadpool(_users(info).update_current, _caller(info), data)
    return {"message": "User updated", "user": updated}


@mutation.field("deleteUser")
async def resolve_delete_user(_obj, info):
    deleted = await run_in_threadpool(_users(info).delete_current, _caller(info))
    return {"message": "User deleted", "user": deleted}


@mutation.field("updateUserAsAdmin")
async def resolve_update_user_as_admin(_obj, info, id, user):
    data = parse_input(UserModify, user)
    updated = await run_in_threadpool(_users(info).update_as_admin, _caller(info), id, data)
    return {"message": "User updated", "user": updated}


@mutation.field("deleteUserAsAdmin")
async def resolve_delete_user_as_admin(_obj, info, id):
    deleted = await run_in_threadpool(_users(info).delete_as_admin, _caller(info), id)
    return {"message": "User deleted", "user": deleted}
