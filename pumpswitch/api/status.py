"""Pump status JSON endpoints."""
from flask import current_app, jsonify

from pumpswitch.api import api_bp, pump_bp


@api_bp.route('/status', methods=['GET'])
def get_pump_status():
    """Get pump and schedule status."""
    controller = current_app.config['PUMP_CONTROLLER']
    config = current_app.config['PUMP_CONFIG']

    state = controller.status()
    return jsonify({
        'success': True,
        'status': {
            'is_on': state['is_on'],
            'on_duration_seconds': int(state['on_duration'].total_seconds()),
            'started_at': state['started_at'].isoformat() if state['started_at'] else None,
            'cycle_enabled': controller.is_cycle_enabled(),
            'cron_intervals': config.cron_intervals,
            'max_on_duration_seconds': int(config.max_on_duration.total_seconds()),
        }
    }), 200


@api_bp.route('/log', methods=['GET'])
def get_pump_log():
    """Get recent pump start/stop events."""
    controller = current_app.config['PUMP_CONTROLLER']
    log = controller.recent_log()
    entries = log.split('\n') if log else []
    return jsonify({
        'success': True,
        'logs': entries,
        'count': len(entries)
    }), 200


@pump_bp.route('/health', methods=['GET'])
def health():
    """API health check endpoint"""
    return jsonify({
        'status': 'healthy',
        'service': 'pumpswitch'
    }), 200
