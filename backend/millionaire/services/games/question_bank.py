from sqlalchemy import func

from millionaire.models import Question


def fetch_question(level, exclude_ids=()):
    """Random question of the given level not in `exclude_ids`, or None."""
    query = Question.query.filter_by(level=level)
    if exclude_ids:
        query = query.filter(Question.id.notin_(list(exclude_ids)))
    return query.order_by(func.random()).first()
