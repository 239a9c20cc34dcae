from django.db import connection, DatabaseError
from django.http import JsonResponse


def health_check(request):
    """Liveness probe, also touches the database."""
    try:
        with connection.cursor() as cursor:
            cursor.execute('SELECT 1')
    except DatabaseError:
        return JsonResponse({'status': 'unhealthy', 'database': 'unreachable'}, status=503)

    return JsonResponse({'status': 'ok'})


def csrf_failure(request, reason=''):
    """Anti-forgery failure raised by Django's CSRF middleware."""
    return JsonResponse({
        'error': 'Invalid CSRF token',
        'status': 403
    }, status=403)


def error_404(request, exception):
    """Custom 404 handler."""
    return JsonResponse({
        'error': 'Not found',
        'status': 404
    }, status=404)


def error_500(request):
    """Custom 500 handler."""
    return JsonResponse({
        'error': 'Internal error',
        'status': 500
    }, status=500)
