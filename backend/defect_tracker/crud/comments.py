from sqlalchemy.orm import Session, joinedload

from defect_tracker.db.models.comment import Comment


def list_comments(db: Session, defect_id: int):
    return (
        db.query(Comment)
        .options(joinedload(Comment.author))
        .filter(Comment.defect_id == defect_id)
        .order_by(Comment.created_at, Comment.id)
        .all()
    )


def create_comment(db: Session, defect_id: int, author_id: int, content: str) -> Comment:
    c = Comment(defect_id=defect_id, author_id=author_id, content=content)
    db.add(c)
    db.commit()
    db.refresh(c)
    return c
