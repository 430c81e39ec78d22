# fitness_api/api/workouts.py
# Роуты тренировок: создание, списки, поиск, изменение, архив, удаление.
# Изменять тренировку может только её владелец или администратор;
# чужая тренировка для остальных выглядит как несуществующая (404).
from typing import List

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from fitness_api.api.deps import get_db, require_auth
from fitness_api.core.errors import NotFoundError
from fitness_api.core.security import Identity
from fitness_api.core.validation import check_resource_id, normalize_id, validate
from fitness_api.models.workout import COMPLETED_STATUS, Workout
from fitness_api.schemas.workout import (
    WorkoutActionResponse,
    WorkoutCreate,
    WorkoutOut,
    WorkoutSearch,
    WorkoutUpdate,
)

router = APIRouter()

WORKOUT_NOT_FOUND = "Workout not found"


def _escape_like(value: str) -> str:
    return value.replace("\\", "\\\\").replace("%", "\\%").replace("_", "\\_")


def _get_workout(db: Session, workout_id: str) -> Workout:
    validate(check_resource_id(workout_id))
    workout = db.query(Workout).filter(Workout.id == normalize_id(workout_id)).first()
    if workout is None:
        raise NotFoundError(WORKOUT_NOT_FOUND)
    return workout


def _get_owned_workout(db: Session, workout_id: str, identity: Identity) -> Workout:
    validate(check_resource_id(workout_id))
    query = db.query(Workout).filter(Workout.id == normalize_id(workout_id))
    if not identity.is_admin:
        query = query.filter(Workout.user_id == identity.id)
    workout = query.first()
    if workout is None:
        raise NotFoundError(WORKOUT_NOT_FOUND)
    return workout


def _action(message: str, workout: Workout) -> dict:
    return {"message": message, "workout": WorkoutOut.model_validate(workout)}


@router.post("", status_code=201, response_model=WorkoutOut)
def create_workout(
    payload: WorkoutCreate,
    identity: Identity = Depends(require_auth),
    db: Session = Depends(get_db),
):
    workout = Workout(
        user_id=identity.id,
        name=payload.name,
        duration=payload.duration,
        status=payload.status,
    )
    if payload.date_added is not None:
        workout.date_added = payload.date_added
    db.add(workout)
    db.commit()
    db.refresh(workout)
    return WorkoutOut.model_validate(workout)


@router.get("/all", response_model=List[WorkoutOut])
def get_all_workouts(identity: Identity = Depends(require_auth), db: Session = Depends(get_db)):
    """Все тренировки текущего пользователя."""
    workouts = (
        db.query(Workout)
        .filter(Workout.user_id == identity.id)
        .order_by(Workout.date_added)
        .all()
    )
    return [WorkoutOut.model_validate(w) for w in workouts]


@router.get("/active", response_model=List[WorkoutOut])
def get_active_workouts(db: Session = Depends(get_db)):
    workouts = db.query(Workout).filter(Workout.is_active.is_(True)).order_by(Workout.date_added).all()
    return [WorkoutOut.model_validate(w) for w in workouts]


@router.post("/search", response_model=List[WorkoutOut])
def search_by_name(payload: WorkoutSearch, db: Session = Depends(get_db)):
    """Поиск по подстроке имени без учёта регистра."""
    pattern = f"%{_escape_like(payload.name)}%"
    workouts = (
        db.query(Workout)
        .filter(Workout.name.ilike(pattern, escape="\\"))
        .order_by(Workout.date_added)
        .all()
    )
    return [WorkoutOut.model_validate(w) for w in workouts]


@router.get("/{workout_id}", response_model=WorkoutOut)
def get_workout_by_id(workout_id: str, db: Session = Depends(get_db)):
    return WorkoutOut.model_validate(_get_workout(db, workout_id))


@router.patch("/{workout_id}/update", response_model=WorkoutActionResponse)
def update_workout(
    workout_id: str,
    payload: WorkoutUpdate,
    identity: Identity = Depends(require_auth),
    db: Session = Depends(get_db),
):
    workout = _get_owned_workout(db, workout_id, identity)
    for field, value in payload.model_dump(exclude_none=True).items():
        setattr(workout, field, value)
    db.commit()
    db.refresh(workout)
    return _action("Workout updated successfully", workout)


@router.patch("/{workout_id}/activate", response_model=WorkoutActionResponse)
def activate_workout(
    workout_id: str,
    identity: Identity = Depends(require_auth),
    db: Session = Depends(get_db),
):
    workout = _get_owned_workout(db, workout_id, identity)
    if workout.is_active:
        return _action("Workout already active", workout)
    workout.is_active = True
    db.commit()
    db.refresh(workout)
    return _action("Workout activated successfully", workout)


@router.patch("/{workout_id}/archive", response_model=WorkoutActionResponse)
def archive_workout(
    workout_id: str,
    identity: Identity = Depends(require_auth),
    db: Session = Depends(get_db),
):
    workout = _get_owned_workout(db, workout_id, identity)
    if not workout.is_active:
        return _action("Workout already archived", workout)
    workout.is_active = False
    db.commit()
    db.refresh(workout)
    return _action("Workout archived successfully", workout)


@router.delete("/deleteWorkout/{workout_id}", response_model=WorkoutActionResponse)
def delete_workout(
    workout_id: str,
    identity: Identity = Depends(require_auth),
    db: Session = Depends(get_db),
):
    workout = _get_owned_workout(db, workout_id, identity)
    # Снимок до удаления: после commit объект уже не читается
    response = _action("Workout deleted successfully", workout)
    db.delete(workout)
    db.commit()
    return response


@router.patch("/completeWorkoutStatus/{workout_id}", response_model=WorkoutActionResponse)
def complete_workout_status(
    workout_id: str,
    identity: Identity = Depends(require_auth),
    db: Session = Depends(get_db),
):
    workout = _get_owned_workout(db, workout_id, identity)
    workout.status = COMPLETED_STATUS
    db.commit()
    db.refresh(workout)
    return _action("Workout marked as completed", workout)
