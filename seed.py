import logging
from student_records.core.config import settings
from student_records.core.database import MongoDatabase
from student_records.core.exceptions import BaseAPIException
from student_records.services.student import student as crud_student
from student_records.services.student.store import StudentStore

# Setup logging to see output
logging.basicConfig(level=logging.INFO)
logger = logging.getLogger(__name__)

SAMPLE_STUDENTS = [
    {
        "rollNumber": "r001",
        "fullName": "Aarav Sharma",
        "gender": "Male",
        "dateOfBirth": "2010-04-12",
        "className": "Grade 8",
        "section": "a",
        "email": "Aarav.Sharma@example.com",
        "phone": "9876543210",
        "guardianName": "Rohit Sharma",
        "guardianPhone": "9876500001",
        "address": "12 MG Road, Pune",
    },
    {
        "rollNumber": "r002",
        "fullName": "Diya Patel",
        "gender": "Female",
        "dateOfBirth": "2009-11-03",
        "className": "Grade 9",
        "section": "b",
        "email": "diya.patel@example.com",
        "phone": "9876543211",
        "guardianName": "Meena Patel",
        "guardianPhone": "9876500002",
        "address": "48 Ring Road, Ahmedabad",
        "status": "On Leave",
    },
    {
        "rollNumber": "r003",
        "fullName": "Kabir Singh",
        "className": "Grade 12",
        "email": "kabir.singh@example.com",
        "phone": "9876543212",
        "guardianName": "Harpreet Singh",
        "guardianPhone": "9876500003",
        "address": "7 Mall Road, Amritsar",
        "status": "Graduated",
    },
]


def seed_data():
    """
    Function to seed initial students into the database.
    """
    database = MongoDatabase().connect()
    try:
        store = StudentStore(database.get_collection(settings.MONGODB_STUDENTS_COLLECTION))
        store.ensure_indexes()

        # Check if data already exists to avoid duplication
        if store.count():
            logger.info("Database already contains data. Skipping seed.")
            return

        logger.info("Seeding data...")
        for payload in SAMPLE_STUDENTS:
            crud_student.create_student(store, payload)

        logger.info("Data seeded successfully!")

    except BaseAPIException as e:
        logger.error(f"Error seeding data: {e.message}")
        raise
    finally:
        database.close() # Always close the connection

if __name__ == "__main__":
    seed_data()
