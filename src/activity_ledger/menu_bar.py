#!/usr/bin/env python3
"""
Menu Bar Application for Activity Ledger
Shows the running activity in the menu bar and drives the ledger.
"""

import sys
from datetime import datetime

try:
    import objc
    from AppKit import (
        NSAlert,
        NSAlertFirstButtonReturn,
        NSAlertStyleInformational,
        NSAlertStyleWarning,
        NSApplication,
        NSButton,
        NSComboBox,
        NSMakeRect,
        NSMenu,
        NSMenuItem,
        NSModalResponseOK,
        NSSavePanel,
        NSStatusBar,
        NSTextField,
        NSURL,
        NSVariableStatusItemLength,
        NSView,
    )
    from Foundation import NSObject, NSTimer
except ImportError:
    print(
        "Error: pyobjc-framework-Cocoa not installed. "
        "Run: pip install pyobjc-framework-Cocoa"
    )
    exit(1)

from .cli import create_service
from .config import get_config
from .export import default_export_directory, format_hours_minutes
from .notifications import Messages
from .reports import (
    adjust_offset,
    format_offset,
    hour_labels,
    now_marker,
    statistics_rows,
    timeline_segments,
)

# (forward, fine) for the offset buttons, left to right; the index is the button tag
OFFSET_BUTTONS = ((False, False), (False, True), (True, True), (True, False))


def parse_minutes(text):
    """Offset field text in minutes -> seconds. Empty means zero."""
    text = str(text).strip()
    return int(text) * 60 if text else 0


class ActivityLedgerMenuBarDelegate(NSObject):
    def init(self):
        self = objc.super(ActivityLedgerMenuBarDelegate, self).init()
        if self is None:
            return None

        self.config = get_config()
        self.service = create_service()
        self.messages = Messages()
        self.message_items = []
        self.offset_field = None
        self.current_activity = ""

        # Create status bar item
        self.status_bar = NSStatusBar.systemStatusBar()
        self.status_item = self.status_bar.statusItemWithLength_(
            NSVariableStatusItemLength
        )

        self.setup_menu()
        self.update_icon()

        self.timer = (
            NSTimer.scheduledTimerWithTimeInterval_target_selector_userInfo_repeats_(
                2.0, self, "updateStatus:", None, True
            )
        )

        return self

    def _add_item(self, title, action):
        item = NSMenuItem.alloc().initWithTitle_action_keyEquivalent_(title, action, "")
        if action:
            item.setTarget_(self)
        self.menu.addItem_(item)
        return item

    def setup_menu(self):
        """Set up the menu bar menu."""
        self.menu = NSMenu.alloc().init()

        self.status_menu_item = self._add_item("No activity running", None)
        self.menu.addItem_(NSMenuItem.separatorItem())

        self._add_item("Start Activity…", "startActivity:")
        self._add_item("Stop Activity…", "stopActivity:")
        self.menu.addItem_(NSMenuItem.separatorItem())

        self._add_item("Today's Timeline", "showTimeline:")
        self._add_item("Statistics", "showStatistics:")
        self._add_item("Export CSV…", "exportActivities:")
        self.menu.addItem_(NSMenuItem.separatorItem())

        self._add_item("Clear", "clearActivities:")
        self._add_item("Hard Clear…", "hardClearActivities:")
        self.menu.addItem_(NSMenuItem.separatorItem())

        self._add_item("Quit", "quitApp:")

        self.status_item.setMenu_(self.menu)

    def update_icon(self):
        """Update the menu bar title based on the running activity."""
        button = self.status_item.button()
        if self.current_activity:
            button.setTitle_(f"● {self.current_activity}")
        else:
            button.setTitle_("○")

    def refresh_messages(self):
        """Show live notifications as disabled items below the status line."""
        for item in self.message_items:
            self.menu.removeItem_(item)
        self.message_items = []

        for index, (message, _) in enumerate(self.messages.get_messages(), start=1):
            prefix = "⚠" if message.is_error else "✓"
            item = NSMenuItem.alloc().initWithTitle_action_keyEquivalent_(
                f"{prefix} {message.text}", None, ""
            )
            item.setEnabled_(False)
            self.menu.insertItem_atIndex_(item, index)
            self.message_items.append(item)

    def show_alert(self, title, text, warning=False):
        alert = NSAlert.alloc().init()
        alert.setAlertStyle_(NSAlertStyleWarning if warning else NSAlertStyleInformational)
        alert.setMessageText_(title)
        alert.setInformativeText_(text)
        alert.addButtonWithTitle_("OK")
        alert.runModal()

    def report(self, result, success_text, failure_text):
        """Turn a service result into a notification."""
        if result.ok:
            self.messages.success(success_text)
            print(success_text)
        else:
            self.messages.error(f"{failure_text}: {result.error}")
            self.show_alert(failure_text, result.error, warning=True)
        self.refresh_messages()

    @objc.IBAction
    def updateStatus_(self, timer):
        """Refresh the status line, notifications and icon."""
        result = self.service.get_current_activity()
        self.current_activity = result.value if result.ok else ""

        if self.current_activity:
            self.status_menu_item.setTitle_(f"Running: {self.current_activity}")
        else:
            self.status_menu_item.setTitle_("No activity running")

        self.messages.remove_old_messages()
        self.refresh_messages()
        self.update_icon()

    def _offset_row(self, y):
        """Offset field in minutes with step buttons; returns the views."""
        self.offset_field = NSTextField.alloc().initWithFrame_(NSMakeRect(0, y, 80, 24))
        self.offset_field.setStringValue_("0")
        views = [self.offset_field]

        for tag, (forward, fine) in enumerate(OFFSET_BUTTONS):
            step = self.config.offset_fine_step if fine else self.config.offset_step
            title = f"{'+' if forward else '-'}{step // 60}m"
            button = NSButton.buttonWithTitle_target_action_(title, self, "adjustOffset:")
            button.setTag_(tag)
            button.setFrame_(NSMakeRect(84 + tag * 50, y, 48, 24))
            views.append(button)
        return views

    @objc.IBAction
    def adjustOffset_(self, sender):
        """Move the prompt's offset one step back or forward."""
        forward, fine = OFFSET_BUTTONS[sender.tag()]
        try:
            offset = parse_minutes(self.offset_field.stringValue())
        except ValueError:
            offset = 0
        offset = adjust_offset(
            offset,
            forward,
            fine=fine,
            step=self.config.offset_step,
            fine_step=self.config.offset_fine_step,
        )
        self.offset_field.setStringValue_(str(offset // 60))

    def prompt_activity(self, title="Start Activity", button="Start", ask_name=True):
        """Ask for an activity name and an offset in minutes.

        Returns:
            (name, offset_seconds), or None when cancelled. The name is
            empty when ``ask_name`` is False.
        """
        alert = NSAlert.alloc().init()
        alert.setMessageText_(title)
        if ask_name:
            alert.setInformativeText_(
                "Activity name, and an offset in minutes "
                "(negative = earlier, positive = later)."
            )
        else:
            alert.setInformativeText_(
                "Offset in minutes (negative = earlier, positive = later)."
            )
        alert.addButtonWithTitle_(button)
        alert.addButtonWithTitle_("Cancel")

        container = NSView.alloc().initWithFrame_(NSMakeRect(0, 0, 284, 58 if ask_name else 24))
        name_box = None
        if ask_name:
            names = self.service.list_activities()
            name_box = NSComboBox.alloc().initWithFrame_(NSMakeRect(0, 34, 284, 24))
            name_box.addItemsWithObjectValues_(names.value if names.ok else [])
            name_box.setCompletes_(True)
            name_box.setStringValue_(self.current_activity)
            container.addSubview_(name_box)
        for view in self._offset_row(0):
            container.addSubview_(view)
        alert.setAccessoryView_(container)

        if alert.runModal() != NSAlertFirstButtonReturn:
            return None

        name = str(name_box.stringValue()).strip() if name_box is not None else ""
        offset_text = self.offset_field.stringValue()
        try:
            offset = parse_minutes(offset_text)
        except ValueError:
            self.show_alert("Invalid offset", f"Not a number of minutes: {offset_text}")
            return None
        return name, offset

    @objc.IBAction
    def startActivity_(self, sender):
        answer = self.prompt_activity()
        if answer is None:
            return
        name, offset = answer
        result = self.service.start_activity(name, offset)
        self.report(
            result,
            f"Started activity: {name} ({format_offset(offset)})",
            "Failed to start activity",
        )
        self.updateStatus_(None)

    @objc.IBAction
    def stopActivity_(self, sender):
        answer = self.prompt_activity("Stop Activity", "Stop", ask_name=False)
        if answer is None:
            return
        _, offset = answer
        name = self.current_activity
        result = self.service.stop_activity(offset)
        self.report(
            result,
            f"Stopped activity: {name} ({format_offset(offset)})",
            "Failed to stop activity",
        )
        self.updateStatus_(None)

    @objc.IBAction
    def showTimeline_(self, sender):
        """Show today's intervals in an alert."""
        result = self.service.todays_activities()
        if not result.ok:
            self.show_alert("Failed to fetch activities", result.error, warning=True)
            return

        now = int(datetime.now().timestamp())
        start_hour = self.config.get("timeline_start_hour", 8)
        end_hour = self.config.get("timeline_end_hour", 19)
        segments = timeline_segments(result.value, now, start_hour, end_hour)

        lines = []
        for (name, start, end), segment in zip(result.value, segments):
            started = datetime.fromtimestamp(start).strftime("%H:%M")
            ended = "now" if segment.is_open else datetime.fromtimestamp(end).strftime("%H:%M")
            duration = format_hours_minutes(max((end or now) - start, 0))
            lines.append(
                f"{segment.marker} {started}-{ended}  {duration:>6}  {name}  "
                f"({segment.width:.0f}% of day)"
            )

        if not lines:
            self.show_alert("Today's Timeline", "Nothing tracked today")
            return

        hours = "  ".join(label for label, _ in hour_labels(start_hour, end_hour))
        marker = now_marker(now, start_hour, end_hour)
        header = f"{hours}\nNow at {marker:.0f}% of the day"
        self.show_alert("Today's Timeline", header + "\n\n" + "\n".join(lines))

    @objc.IBAction
    def showStatistics_(self, sender):
        result = self.service.get_activities_times()
        if not result.ok:
            self.show_alert("Failed to fetch statistics", result.error, warning=True)
            return
        rows = statistics_rows(dict(result.value))
        text = "\n".join(f"{row.label}  {row.bar()}".rstrip() for row in rows)
        self.show_alert("Statistics", text or "No activity time recorded")

    def choose_export_path(self):
        """Run the save panel; returns a path or None."""
        panel = NSSavePanel.savePanel()
        panel.setTitle_("Save activities to")
        panel.setNameFieldStringValue_("activities.csv")
        directory = self.config.export_dir or default_export_directory()
        panel.setDirectoryURL_(NSURL.fileURLWithPath_(str(directory)))
        if panel.runModal() != NSModalResponseOK:
            return None
        return str(panel.URL().path())

    @objc.IBAction
    def exportActivities_(self, sender):
        result = self.service.export_activities(self.choose_export_path)
        if result.cancelled:
            self.messages.error("Export cancelled: no file selected")
            self.refresh_messages()
            return
        self.report(result, "Data exported", "Failed to export data")

    @objc.IBAction
    def clearActivities_(self, sender):
        result = self.service.clear_activities()
        self.report(result, "Data cleared", "Failed to clear data")
        self.updateStatus_(None)

    @objc.IBAction
    def hardClearActivities_(self, sender):
        alert = NSAlert.alloc().init()
        alert.setAlertStyle_(NSAlertStyleWarning)
        alert.setMessageText_("Delete all activities?")
        alert.setInformativeText_("Every interval and clear is deleted. This cannot be undone.")
        alert.addButtonWithTitle_("Delete")
        alert.addButtonWithTitle_("Cancel")
        if alert.runModal() != NSAlertFirstButtonReturn:
            return

        result = self.service.hard_clear_activities()
        self.report(result, "Data cleared", "Failed to clear data")
        self.updateStatus_(None)

    @objc.IBAction
    def quitApp_(self, sender):
        """Quit the application, leaving the running activity open."""
        self.service.close()
        NSApplication.sharedApplication().terminate_(None)


class MenuBarApp:
    def __init__(self):
        self.app = NSApplication.sharedApplication()
        self.delegate = ActivityLedgerMenuBarDelegate.alloc().init()
        self.app.setActivationPolicy_(2)  # NSApplicationActivationPolicyAccessory

    def run(self):
        """Run the menu bar application."""
        print("Starting menu bar app...")
        print("Look for the activity ledger icon in your menu bar")

        try:
            self.app.run()
        except KeyboardInterrupt:
            print("\nShutting down...")
            self.delegate.service.close()


def main():
    """Main entry point."""
    try:
        app = MenuBarApp()
        app.run()
    except KeyboardInterrupt:
        print("\nApplication interrupted by user. Shutting down...")
        sys.exit(0)
    except Exception as e:
        print(f"Error starting application: {e}")
        sys.exit(1)


if __name__ == "__main__":
    main()
