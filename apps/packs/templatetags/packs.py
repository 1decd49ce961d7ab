# apps/packs/templatetags/packs.py
from __future__ import annotations

from django import template

from apps.packs.helper import PackHelper
from apps.packs.instance import get_instance
from apps.packs.middleware import STATE_ATTR
from apps.packs.queues import RenderState
from apps.packs.renderers import AssetPathResolver, DjangoTagRenderer

register = template.Library()


def render_state(context) -> RenderState:
    """
    RenderState of the current page render: on the request when there is one
    (see PackRenderStateMiddleware), otherwise at the root of the render context.
    """
    request = context.get("request")
    if request is not None:
        state = getattr(request, STATE_ATTR, None)
        if state is None:
            state = RenderState()
            setattr(request, STATE_ATTR, state)
        return state
    root = context.render_context.dicts[0]
    return root.setdefault(STATE_ATTR, RenderState())


def pack_helper(context) -> PackHelper:
    instance = get_instance()
    config = instance.config
    resolver = AssetPathResolver(config.asset_host, context.get("request"))
    return PackHelper(
        instance.manifest,
        DjangoTagRenderer(resolver),
        state=render_state(context),
        resolver=resolver,
        image_prefix=config.image_prefix,
        inlining_css=config.inlining_css,
    )


@register.simple_tag(takes_context=True)
def javascript_pack_tag(context, *names, defer=True, **options):
    """
    {% javascript_pack_tag 'calendar' 'map' %}
    {% javascript_pack_tag 'application' defer=False data_turbo_track='reload' %}
    """
    return pack_helper(context).javascript_pack_tag(*names, defer=defer, **options)


@register.simple_tag(takes_context=True)
def append_javascript_pack_tag(context, *names, defer=True):
    pack_helper(context).append_javascript_pack_tag(*names, defer=defer)
    return ""


@register.simple_tag(takes_context=True)
def prepend_javascript_pack_tag(context, *names, defer=True):
    pack_helper(context).prepend_javascript_pack_tag(*names, defer=defer)
    return ""


@register.simple_tag(takes_context=True)
def stylesheet_pack_tag(context, *names, **options):
    return pack_helper(context).stylesheet_pack_tag(*names, **options)


@register.simple_tag(takes_context=True)
def append_stylesheet_pack_tag(context, *names):
    pack_helper(context).append_stylesheet_pack_tag(*names)
    return ""


@register.simple_tag(takes_context=True)
def asset_pack_path(context, name, **options):
    return pack_helper(context).asset_pack_path(name, **options)


@register.simple_tag(takes_context=True)
def asset_pack_url(context, name, **options):
    return pack_helper(context).asset_pack_url(name, **options)


@register.simple_tag(takes_context=True)
def image_pack_path(context, name, **options):
    return pack_helper(context).image_pack_path(name, **options)


@register.simple_tag(takes_context=True)
def image_pack_url(context, name, **options):
    return pack_helper(context).image_pack_url(name, **options)


@register.simple_tag(takes_context=True)
def image_pack_tag(context, name, **options):
    return pack_helper(context).image_pack_tag(name, **options)


@register.simple_tag(takes_context=True)
def favicon_pack_tag(context, name, **options):
    return pack_helper(context).favicon_pack_tag(name, **options)


@register.simple_tag(takes_context=True)
def preload_pack_asset(context, name, **options):
    return pack_helper(context).preload_pack_asset(name, **options)
