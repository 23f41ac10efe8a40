# coursefinder/router/routers.py

from fastapi import FastAPI
from coursefinder.modules.courses.course_controller import router as course_router
from coursefinder.modules.saved_courses.saved_course_controller import router as saved_course_router
from coursefinder.modules.search.search_controller import router as search_router
from coursefinder.modules.universities.university_controller import router as university_router

def include_routers(app: FastAPI) -> None:
    app.include_router(course_router)
    app.include_router(saved_course_router)
    app.include_router(search_router)
    app.include_router(university_router)
