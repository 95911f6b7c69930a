"""Tests for the plugin manager"""

from component_release.plugins import (
    HookPoint,
    Plugin,
    PluginContext,
    PluginInfo,
    PluginManager,
    PluginPriority,
)
from component_release.utils.async_utils import run_async


class OrderPlugin(Plugin):

    def __init__(self, name, priority, log, manager=None):
        super().__init__()
        self.name = name
        self.priority = priority
        self.log = log
        self.manager = manager

    def get_info(self):
        return PluginInfo(name=self.name, version="1.0.0", description="test",
                          priority=self.priority,
                          hook_points=[HookPoint.POST_EXPORT, HookPoint.POST_PUBLISH])

    async def on_export_post(self, context):
        self.log.append((self.name, context.hook_point))
        if self.manager is not None:
            self.manager.enqueue(PluginContext(hook_point=HookPoint.POST_PUBLISH, operation="publish"))
            assert await self.manager.drain() == []
        return context

    async def on_publish_post(self, context):
        self.log.append((self.name, context.hook_point))
        return context


def test_priority_order():
    log = []
    manager = PluginManager()
    manager.register(OrderPlugin("late", PluginPriority.LOW, log))
    manager.register(OrderPlugin("early", PluginPriority.HIGH, log))

    manager.enqueue(PluginContext(hook_point=HookPoint.POST_EXPORT, operation="export"))
    run_async(manager.drain())

    assert [name for name, _ in log] == ["early", "late"]


def test_events_enqueued_while_draining_run_after():
    log = []
    manager = PluginManager()
    manager.register(OrderPlugin("chained", PluginPriority.NORMAL, log, manager))

    manager.enqueue(PluginContext(hook_point=HookPoint.POST_EXPORT, operation="export"))
    processed = run_async(manager.drain())

    assert [ctx.hook_point for ctx in processed] == [HookPoint.POST_EXPORT, HookPoint.POST_PUBLISH]
    assert log == [("chained", HookPoint.POST_EXPORT), ("chained", HookPoint.POST_PUBLISH)]
    assert manager.pending == 0


def test_unregister():
    manager = PluginManager()
    manager.register(OrderPlugin("one", PluginPriority.NORMAL, []))
    manager.unregister("one")
    assert manager.list_plugins() == []
    assert manager.get_plugin("one") is None


def test_auto_publish_loaded_from_config(make_workspace):
    plain = make_workspace(name="plain")
    auto = make_workspace(name="auto", auto_publish=True)

    assert plain.plugin_manager.get_plugin("auto-publish") is None
    assert auto.plugin_manager.get_plugin("auto-publish") is not None
