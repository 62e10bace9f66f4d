# content/views.py

import logging

from django.contrib import messages
from django.contrib.auth import get_user_model, login, logout as auth_logout
from django.http import JsonResponse
from django.shortcuts import redirect, render
from django.utils.translation import gettext as _
from django.views.decorators.http import require_GET, require_POST

from .auth import FirstItemExists, create_first_item, with_auth
from .forms import InitFirstItemForm

logger = logging.getLogger(__name__)


def init_first_item_view(request):
    """Creates the first user while the User list is empty."""
    if get_user_model().objects.exists():
        if request.user.is_authenticated:
            return redirect('admin:index')
        return redirect('admin:login')

    if request.method == 'POST':
        form = InitFirstItemForm(request.POST)
        if form.is_valid():
            try:
                user = create_first_item(form.save(commit=False))
            except FirstItemExists:
                logger.warning("[INIT] First user was created concurrently, sending to login")
                messages.error(request, _("The first user has already been created. Please sign in."))
                return redirect('admin:login')

            login(request, user)
            messages.success(request, _("Welcome, %(name)s! Your admin account is ready.") % {'name': user.name})
            return redirect('admin:index')
    else:
        form = InitFirstItemForm()

    return render(request, 'content/init_first_item.html', {'form': form})


@require_GET
@with_auth
def session_view(request):
    """Returns the data carried by the current session."""
    claims = request.cms_session
    return JsonResponse({
        'list_key': claims.list_key,
        'item_id': claims.item_id,
        'data': {
            'name': claims.name,
            'is_admin': claims.is_admin,
        },
    })


@require_POST
def logout_view(request):
    auth_logout(request)
    return redirect('admin:login')
