"""
Scheduled Posts Module Routes

Every query runs with the caller's own access token; the owner of a post is
always the user resolved from that token.
"""

from flask import g, jsonify

from . import posts_bp
from .forms import SchedulePostForm
from postscheduler.core.database import ServiceError, get_gateway
from postscheduler.core.forms import form_from_request
from postscheduler.core.logger import get_logger
from postscheduler.core.session import NOT_AUTHENTICATED, current_user, login_required

logger = get_logger(__name__)

SCHEDULE_ERROR = 'An error occurred while scheduling the post'


@posts_bp.route('/schedule-post', methods=['POST'])
def schedule_post():
    # Fields are checked before the session: an incomplete body is a 400
    # whether or not the caller is signed in.
    form = form_from_request(SchedulePostForm)
    if not form.validate():
        return jsonify({'error': 'Missing required fields'}), 400

    try:
        user = current_user()
        if user is None:
            return jsonify(NOT_AUTHENTICATED), 401

        post = {
            'user_id': user['id'],
            'content': form.content.data,
            'date_time': form.date_time.data,
            'platform': form.platform.data,
        }
        logger.info(f"Attempting to insert post: {post}")

        stored = get_gateway().insert_post(g.access_token, post)
    except ServiceError as e:
        logger.error(f"Error scheduling post: {e.message}")
        return jsonify({'error': SCHEDULE_ERROR, 'details': e.message}), 500

    logger.info(f"Post scheduled successfully: {stored}")
    return jsonify({'message': 'Post scheduled successfully', 'post': stored})


@posts_bp.route('/scheduled-posts')
@login_required
def scheduled_posts():
    """ Lists the caller's posts, earliest first. """
    try:
        posts = get_gateway().list_posts(g.access_token, g.current_user['id'])
    except ServiceError as e:
        logger.error(f"Error fetching scheduled posts: {e.message}")
        return jsonify({'error': 'An error occurred while fetching scheduled posts'}), 500

    return jsonify(posts)
