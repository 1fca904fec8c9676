"""API v1 router aggregating all route modules."""

from fastapi import APIRouter

from app.api.v1.routes import (
    auth,
    classes,
    record_books,
    schools,
    settings,
    students,
    teachers,
    timetable,
    transfers,
)

api_router = APIRouter()

api_router.include_router(auth.router)
api_router.include_router(schools.router)
api_router.include_router(settings.router)
api_router.include_router(classes.router)
api_router.include_router(teachers.router)
api_router.include_router(students.router)
api_router.include_router(transfers.router)
api_router.include_router(transfers.enrollments_router)
api_router.include_router(record_books.router)
api_router.include_router(timetable.router)
