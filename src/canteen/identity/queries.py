"""Read helpers over the User repository."""

from protean.utils.globals import current_domain

from canteen.identity.user import User


def find_user_by_email(email):
    if not email:
        return None
    results = current_domain.repository_for(User)._dao.query.filter(email=email.strip().lower()).all()
    return results.first


def find_user_by_student_id(student_id):
    if not student_id:
        return None
    results = current_domain.repository_for(User)._dao.query.filter(student_id=student_id.strip()).all()
    return results.first


def find_user_by_reset_token(token_hash):
    results = current_domain.repository_for(User)._dao.query.filter(reset_password_token=token_hash).all()
    return results.first


def search_users(role=None, search=None):
    """Users matching an optional role and a case-insensitive text search.

    The search term is matched against name, email and student id. Results
    are ordered newest first.
    """
    query = current_domain.repository_for(User)._dao.query
    if role:
        query = query.filter(role=role)
    users = query.limit(None).all().items

    if search:
        term = search.strip().lower()
        users = [
            u
            for u in users
            if term in (u.name or "").lower() or term in (u.email or "").lower() or term in (u.student_id or "").lower()
        ]

    return sorted(users, key=lambda u: u.created_at, reverse=True)
