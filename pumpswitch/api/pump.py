"""Pump control page."""
import logging
from typing import List

from flask import current_app, redirect, render_template_string, request

from pumpswitch.api import pump_bp
from pumpswitch.safety.errors import PersistenceError
from pumpswitch.utils.clock import format_local
from pumpswitch.utils.duration import format_duration

logger = logging.getLogger(__name__)

PAGE_TEMPLATE = """
<html>
<head>
    <meta name="viewport" content="width=device-width, initial-scale=1.0">
    <title>Pump switch</title>
</head>
<body>
    Pump switch: {{ now }}<br>
    Cycle duration: {{ max_on_duration }}<br><br>
    <div style="color:red; margin:2px">{% for error in errors %}{{ error }}<br>{% endfor %}</div>
    <form method="POST">
        <input type="submit" style="width:340px; height:140px; background-color:{{ power_color }}; white-space: break-spaces;" value="{{ power_text }}" name="startstop">
        <input type="hidden" name="poweron" value="{{ 'false' if is_on else 'true' }}">
    </form>
    <form method="POST">
        <input type="submit" style="width:340px; height:140px; background-color:{{ cycle_color }}; white-space: break-spaces;" value="{{ cycle_text }}" name="cycle">
        <input type="hidden" name="cycleon" value="{{ 'false' if cycle_enabled else 'true' }}">
    </form>
    <pre>{{ log }}</pre>
</body>
</html>
"""

IDLE_COLOR = '#C0C0C0'
RUNNING_COLOR = '#FF0000'
CYCLE_COLOR = '#58D68D'


def _controller():
    return current_app.config['PUMP_CONTROLLER']


def _config():
    return current_app.config['PUMP_CONFIG']


def _apply_form() -> List[str]:
    """Apply 'poweron' and 'cycleon' form fields; return error messages."""
    controller = _controller()
    errors = []

    poweron = request.form.get('poweron')
    if poweron is not None:
        try:
            if poweron == 'true':
                controller.power_on()
            else:
                controller.power_off()
        except PersistenceError as e:
            logger.error(f"Power change failed: {e}")
            errors.append(str(e))

    cycleon = request.form.get('cycleon')
    if cycleon is not None:
        try:
            if cycleon == 'true':
                controller.enable_cycle(_config().cron_intervals)
            else:
                controller.disable_cycle()
        except PersistenceError as e:
            logger.error(f"Schedule change failed: {e}")
            errors.append(str(e))

    return errors


def _render_page(errors: List[str]) -> str:
    controller = _controller()
    config = _config()

    state = controller.status()
    is_on = state['is_on']
    power_color = IDLE_COLOR
    power_text = 'Start'
    if is_on:
        power_color = RUNNING_COLOR
        power_text = f"Stop (running for {format_duration(state['on_duration'])})"

    cycle_enabled = controller.is_cycle_enabled()
    cycle_color = IDLE_COLOR
    cycle_text = 'Enable periodic start'
    if cycle_enabled:
        cycle_color = CYCLE_COLOR
        cycle_text = f"Disable periodic start: {config.cron_intervals}"

    return render_template_string(
        PAGE_TEMPLATE,
        now=format_local(controller.clock()),
        max_on_duration=format_duration(config.max_on_duration),
        errors=errors,
        is_on=is_on,
        power_color=power_color,
        power_text=power_text,
        cycle_enabled=cycle_enabled,
        cycle_color=cycle_color,
        cycle_text=cycle_text,
        log=controller.recent_log(),
    )


@pump_bp.route('/', methods=['GET', 'POST'])
def index():
    """Status page; form posts switch the pump and the periodic schedule."""
    if request.method == 'POST':
        errors = _apply_form()
        if not errors:
            return redirect(request.path, code=303)
        return _render_page(errors), 500

    return _render_page([])
