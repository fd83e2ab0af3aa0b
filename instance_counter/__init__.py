"""instance-counter: component instance inventory for design document pages."""

PLUGIN_NAME = "Component Instance Counter"
PLUGIN_VERSION = "1.0.0"
