import json

from django.http import Http404, JsonResponse
from django.utils.dateparse import parse_datetime
from django.views.decorators.csrf import csrf_exempt
from django.views.decorators.http import require_GET, require_POST

from .errors import InvalidIdentifier, InvalidOperation
from .models import Comment
from .services import get_comment_service, get_critic_service


def _json_body(request):
    try:
        data = json.loads(request.body or b"{}")
    except ValueError:
        return None
    return data if isinstance(data, dict) else None


def _failure(comment_id):
    # a missing comment is a 404, anything else (wrong email, lost race) a 403
    status = 404 if get_comment_service().get_comment(comment_id) is None else 403
    return JsonResponse({"success": False}, status=status)


def _bad_request(message):
    return JsonResponse({"error": message}, status=400)


@require_GET
def comment_detail(request, comment_id):
    try:
        comment = get_comment_service().get_comment(comment_id)
    except InvalidIdentifier as e:
        return _bad_request(str(e))
    if comment is None:
        raise Http404("Comment not found")
    return JsonResponse(comment.to_dict())


@csrf_exempt
@require_POST
def add_comment(request):
    data = _json_body(request)
    if data is None:
        return _bad_request("Request body must be JSON")

    date = None
    if data.get("date") is not None:
        try:
            date = parse_datetime(data["date"])
        except (TypeError, ValueError):
            date = None
        if date is None:
            return _bad_request("date must be an ISO 8601 datetime")

    comment = Comment(
        id=data.get("id"),
        date=date,
        movie_id=data.get("movie_id"),
        name=data.get("name"),
        email=data.get("email"),
        text=data.get("text"),
    )
    try:
        inserted = get_comment_service().add_comment(comment)
    except InvalidOperation as e:
        return _bad_request(str(e))
    return JsonResponse(inserted.to_dict(), status=201)


@csrf_exempt
@require_POST
def update_comment(request, comment_id):
    data = _json_body(request)
    if data is None:
        return _bad_request("Request body must be JSON")
    if not data.get("text"):
        return _bad_request("text is required")
    try:
        success = get_comment_service().update_comment(comment_id, data.get("text"), data.get("email"))
    except InvalidIdentifier as e:
        return _bad_request(str(e))
    if not success:
        return _failure(comment_id)
    return JsonResponse({"success": True})


@csrf_exempt
@require_POST
def delete_comment(request, comment_id):
    data = _json_body(request)
    if data is None:
        return _bad_request("Request body must be JSON")
    try:
        success = get_comment_service().delete_comment(comment_id, data.get("email"))
    except InvalidIdentifier as e:
        return _bad_request(str(e))
    if not success:
        return _failure(comment_id)
    return JsonResponse({"success": True})


@require_GET
def movie_comments(request, movie_id):
    comments = get_comment_service().get_movie_comments(movie_id)
    return JsonResponse({"movie_id": movie_id, "comments": [c.to_dict() for c in comments]})


@require_GET
def critics(request):
    most_active = get_critic_service().most_active_commenters()
    return JsonResponse({"critics": [c.to_dict() for c in most_active]})
