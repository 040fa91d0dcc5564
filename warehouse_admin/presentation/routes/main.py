"""
Home route
"""

from flask import Blueprint, render_template

main = Blueprint('main', __name__)


@main.route('/')
def index():
    """Home redirector; the request gate sends visitors to login or the landing page"""
    return render_template('loading.html', message="Đang chuyển hướng...")


@main.route('/healthz')
def healthz():
    return {'status': 'ok'}
