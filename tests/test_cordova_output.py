from cordova_output import (
    PlatformInfo,
    PluginInfo,
    parse_info,
    parse_platform_list,
    parse_plugin_list,
)


INFO_OUTPUT = """\
Get JavaScript project info
<?xml version='1.0' encoding='utf-8'?>
<widget id="com.example.hello" version="1.0.0">
    <name>HelloCordova</name>
</widget>
Plugins:
plugin-a
plugin-b
"""


def test_info_collects_config_and_plugins():
    info = parse_info(INFO_OUTPUT)
    assert info.plugin_names == ["plugin-a", "plugin-b"]
    assert info.config.endswith("</widget>")
    assert '<widget id="com.example.hello" version="1.0.0">' in info.config
    assert "Plugins:" not in info.config


def test_info_skips_blank_lines_between_plugins():
    info = parse_info("<widget>\n</widget>\n\nPlugins:\n\nplugin-a\n   \nplugin-b\r\n")
    assert info.plugin_names == ["plugin-a", "plugin-b"]


def test_info_plugins_marker_on_closing_line():
    info = parse_info("<widget></widget> Plugins:\none\n")
    assert info.config == "<widget></widget> Plugins:"
    assert info.plugin_names == ["one"]


def test_info_without_widget_yields_no_plugins():
    info = parse_info("Plugins:\nplugin-a\n")
    assert info.plugin_names == []
    assert "plugin-a" in info.config


def test_info_without_plugins_section():
    info = parse_info("<widget>\n</widget>\nNothing else\n")
    assert info.plugin_names == []


def test_info_empty_output():
    info = parse_info("")
    assert info.config == ""
    assert info.plugin_names == []


def test_plugin_list_parses_each_matching_line_in_order():
    output = (
        'cordova-plugin-camera 2.1.0 "Camera"\n'
        'cordova-plugin-whitelist 1.2.1 "Whitelist"\n'
        'cordova-plugin-device 1.1.1 "Device Info"\n'
    )
    assert parse_plugin_list(output) == [
        PluginInfo(id="cordova-plugin-camera", version="2.1.0", name="Camera"),
        PluginInfo(id="cordova-plugin-whitelist", version="1.2.1", name="Whitelist"),
        PluginInfo(id="cordova-plugin-device", version="1.1.1", name="Device Info"),
    ]


def test_plugin_list_skips_non_matching_lines():
    output = 'No plugins added. Use `cordova plugin add <plugin>`.\n\n'
    assert parse_plugin_list(output) == []


def test_plugin_list_mixed_output():
    output = 'Warning: something\ncordova-plugin-camera 2.1.0 "Camera"\nbad line\n'
    assert parse_plugin_list(output) == [
        PluginInfo(id="cordova-plugin-camera", version="2.1.0", name="Camera"),
    ]


def test_plugin_list_tolerates_crlf():
    assert parse_plugin_list('a 1.0.0 "A"\r\n') == [PluginInfo(id="a", version="1.0.0", name="A")]


def test_platform_list_inline():
    output = "Installed platforms: android 6.0.0, ios 4.3.0\nAvailable platforms: amazon-fireos, blackberry10\n"
    assert parse_platform_list(output) == [
        PlatformInfo(id="android", version="6.0.0"),
        PlatformInfo(id="ios", version="4.3.0"),
    ]


def test_platform_list_inline_skips_entries_without_version():
    output = "Installed platforms: android 6.0.0, , browser\n"
    assert parse_platform_list(output) == [PlatformInfo(id="android", version="6.0.0")]


def test_platform_list_block_layout():
    output = (
        "Installed platforms:\n"
        "  android 9.0.0\n"
        "  ios 6.1.0\n"
        "Available platforms: \n"
        "  browser ^6.0.0\n"
    )
    assert parse_platform_list(output) == [
        PlatformInfo(id="android", version="9.0.0"),
        PlatformInfo(id="ios", version="6.1.0"),
    ]


def test_platform_list_nothing_installed():
    assert parse_platform_list("Installed platforms: \nAvailable platforms: android\n") == []
    assert parse_platform_list("") == []
