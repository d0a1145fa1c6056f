from render_server.base_renderer import BaseRenderer, PathStatistics, RenderError, RenderState
from render_server.cpu_renderer import CpuRenderer, WorkItem

__all__ = ['BaseRenderer', 'CpuRenderer', 'PathStatistics', 'RenderError', 'RenderState', 'WorkItem']
