"""
Record schema definitions for every upload surface of the operations console.

Field keys are the camelCase names used in uploaded files.  Nested
structures (emergency contacts, routes, schedules) are flattened into
prefixed scalar fields so that every record stays a flat mapping.
"""

from __future__ import annotations

from ingest.schemas.models import (
    RecordSchema,
    boolean,
    date,
    enum,
    number,
    string,
    string_array,
)

PRIORITIES = ("low", "medium", "high", "critical")


# ═══════════════════════════════════════════════════════════
#  Event management
# ═══════════════════════════════════════════════════════════

EVENT = RecordSchema(
    name="Event",
    description="Event master data",
    fields=(
        string("eventId", optional=True, description="Unique event identifier"),
        string("name", description="Name of the event"),
        enum("eventType", ("conference", "meeting", "travel", "training", "other"), optional=True),
        date("startDate", description="Event start date"),
        date("endDate", optional=True, description="Event end date"),
        string("location", optional=True),
        string("description", optional=True),
        enum("status", ("planned", "active", "completed", "cancelled"), optional=True),
        enum("priority", PRIORITIES, optional=True),
        string_array("attendees", optional=True, description="Attendee IDs"),
        number("budget", optional=True, minimum=0),
        string("organizer", optional=True, description="Organizer ID"),
    ),
)

EVENT_ACCOMMODATION = RecordSchema(
    name="EventAccommodation",
    description="Hotel accommodation booked for an event",
    fields=(
        string("eventId"),
        string("accommodationId"),
        string("hotelName"),
        string("address"),
        date("checkInDate"),
        date("checkOutDate"),
        string("roomType"),
        string("roomNumber", optional=True),
        number("guestCount", minimum=1),
        enum("status", ("reserved", "confirmed", "checked-in", "checked-out", "cancelled")),
        number("cost", optional=True, minimum=0),
        string("specialRequests", optional=True),
    ),
)


# ═══════════════════════════════════════════════════════════
#  Passengers
# ═══════════════════════════════════════════════════════════

PASSENGER = RecordSchema(
    name="Passenger",
    description="Travelling passenger",
    fields=(
        string("passengerId"),
        string("firstName"),
        string("lastName"),
        date("dateOfBirth"),
        string("nationality"),
        string("passportNumber", optional=True),
        date("passportExpiry", optional=True),
        string("visaNumber", optional=True),
        date("visaExpiry", optional=True),
        string("contactPhone", optional=True),
        string("contactEmail", optional=True),
        string("emergencyContactName", optional=True),
        string("emergencyContactRelationship", optional=True),
        string("emergencyContactPhone", optional=True),
        string_array("dietaryRestrictions", optional=True),
        string_array("medicalConditions", optional=True),
        boolean("specialAssistance", optional=True),
        enum("status", ("active", "inactive", "suspended"), optional=True),
    ),
)


# ═══════════════════════════════════════════════════════════
#  Fleet management
# ═══════════════════════════════════════════════════════════

VEHICLE = RecordSchema(
    name="Vehicle",
    description="Fleet vehicle",
    fields=(
        string("vehicleId"),
        string("registrationNumber"),
        string("make"),
        string("model"),
        number("year", minimum=1900, maximum=2100),
        string("color"),
        number("capacity", minimum=1),
        enum("fuelType", ("petrol", "diesel", "electric", "hybrid", "other")),
        enum("transmission", ("manual", "automatic")),
        enum("status", ("available", "in-use", "maintenance", "out-of-service"), optional=True),
        date("lastMaintenance", optional=True),
        date("nextMaintenance", optional=True),
        number("mileage", minimum=0),
        number("fuelLevel", optional=True, minimum=0, maximum=100, description="Percent"),
        string("location", optional=True),
        string("assignedDriver", optional=True),
    ),
)

DRIVER = RecordSchema(
    name="Driver",
    description="Fleet driver",
    fields=(
        string("driverId"),
        string("employeeId"),
        string("firstName"),
        string("lastName"),
        date("dateOfBirth"),
        string("licenseNumber"),
        enum("licenseType", ("A", "B", "C", "D", "E")),
        date("licenseExpiry"),
        number("experienceYears", minimum=0),
        string("contactPhone"),
        string("contactEmail"),
        string("emergencyContactName", optional=True),
        string("emergencyContactPhone", optional=True),
        string("medicalCertificateNumber", optional=True),
        date("medicalCertificateExpiry", optional=True),
        enum("status", ("active", "inactive", "suspended", "on-leave"), optional=True),
        string("assignedVehicle", optional=True),
        string("currentLocation", optional=True),
    ),
)


# ═══════════════════════════════════════════════════════════
#  Schedules
# ═══════════════════════════════════════════════════════════

TRANSPORT_SCHEDULE = RecordSchema(
    name="TransportSchedule",
    description="Ground transport run",
    fields=(
        string("scheduleId"),
        string("eventId"),
        string("routeName"),
        string("departureLocation"),
        string("arrivalLocation"),
        date("departureTime"),
        date("arrivalTime"),
        string("vehicleId", optional=True),
        string("driverId", optional=True),
        number("passengerCount", minimum=0),
        number("maxCapacity", minimum=1),
        enum(
            "status",
            ("scheduled", "in-progress", "completed", "cancelled", "delayed"),
            optional=True,
        ),
        number("delayMinutes", optional=True, minimum=0),
        string("notes", optional=True),
        string("specialInstructions", optional=True),
    ),
)

FLIGHT_SCHEDULE = RecordSchema(
    name="FlightSchedule",
    description="Flight booked for an event",
    fields=(
        string("flightId"),
        string("eventId"),
        string("airline"),
        string("flightNumber"),
        string("departureAirport"),
        string("arrivalAirport"),
        date("departureTime"),
        date("arrivalTime"),
        string("aircraftType", optional=True),
        enum("seatClass", ("economy", "business", "first"), optional=True),
        number("passengerCount", minimum=1),
        enum(
            "status",
            ("scheduled", "boarding", "departed", "arrived", "cancelled", "delayed"),
            optional=True,
        ),
        string("gate", optional=True),
        string("terminal", optional=True),
        string("baggageClaim", optional=True),
        number("delayMinutes", optional=True, minimum=0),
        string("cancellationReason", optional=True),
    ),
)

HOTEL_TRANSPORTATION = RecordSchema(
    name="HotelTransportation",
    description="Hotel pickup and dropoff",
    fields=(
        string("transportationId"),
        string("eventId"),
        string("hotelName"),
        string("hotelAddress"),
        date("pickupTime"),
        date("dropoffTime"),
        string("vehicleId", optional=True),
        string("driverId", optional=True),
        number("passengerCount", minimum=1),
        string("pickupLocation"),
        string("dropoffLocation"),
        enum("status", ("scheduled", "in-progress", "completed", "cancelled"), optional=True),
        string("specialRequests", optional=True),
        string("notes", optional=True),
    ),
)


# ═══════════════════════════════════════════════════════════
#  Tasks, documents, visas
# ═══════════════════════════════════════════════════════════

TASK = RecordSchema(
    name="Task",
    description="Operational task",
    fields=(
        string("taskId"),
        string("eventId"),
        string("title"),
        string("description"),
        string("assignedTo"),
        string("assignedBy"),
        enum("priority", PRIORITIES, optional=True),
        enum(
            "status",
            ("pending", "in-progress", "completed", "cancelled", "on-hold"),
            optional=True,
        ),
        date("dueDate"),
        date("startDate", optional=True),
        date("completionDate", optional=True),
        number("estimatedHours", optional=True, minimum=0),
        number("actualHours", optional=True, minimum=0),
        string_array("dependencies", optional=True),
        string_array("tags", optional=True),
        string_array("attachments", optional=True),
        string("notes", optional=True),
    ),
)

DOCUMENT = RecordSchema(
    name="Document",
    description="Uploaded document",
    fields=(
        string("documentId"),
        string("eventId"),
        string("title"),
        string("description", optional=True),
        string("fileName"),
        string("filePath"),
        number("fileSize", minimum=0, description="Bytes"),
        string("mimeType"),
        enum("category", ("passport", "visa", "ticket", "invoice", "contract", "other")),
        enum("status", ("draft", "pending", "approved", "rejected", "expired"), optional=True),
        string("uploadedBy"),
        date("uploadedAt"),
        date("expiryDate", optional=True),
        string_array("tags", optional=True),
        string("version", optional=True),
        boolean("isPublic", optional=True),
    ),
)

VISA = RecordSchema(
    name="Visa",
    description="Visa application",
    fields=(
        string("visaId"),
        string("eventId"),
        string("passengerId"),
        enum("visaType", ("tourist", "business", "work", "student", "transit", "other")),
        string("country"),
        string("visaNumber"),
        date("issueDate"),
        date("expiryDate"),
        enum("entryType", ("single", "double", "multiple")),
        enum(
            "status",
            ("pending", "approved", "rejected", "expired", "cancelled"),
            optional=True,
        ),
        number("processingTime", optional=True, minimum=0, description="Days"),
        number("cost", optional=True, minimum=0),
        string_array("requirements", optional=True),
        string("notes", optional=True),
        date("applicationDate", optional=True),
        date("approvalDate", optional=True),
    ),
)


# ═══════════════════════════════════════════════════════════
#  Arrivals/departures, statistics, reports
# ═══════════════════════════════════════════════════════════

AAD = RecordSchema(
    name="AAD",
    description="Arrival and departure record (fleet assignment)",
    fields=(
        string("aadId"),
        string("eventId"),
        string("passengerId"),
        date("arrivalDate"),
        date("departureDate"),
        string("arrivalTime"),
        string("departureTime"),
        string("arrivalLocation"),
        string("departureLocation"),
        enum("transportMode", ("air", "land", "sea")),
        enum(
            "status",
            ("scheduled", "in-progress", "completed", "cancelled", "delayed"),
            optional=True,
        ),
        number("delayMinutes", optional=True, minimum=0),
        string("notes", optional=True),
        boolean("specialAssistance", optional=True),
    ),
)

STAFF_STATISTICS = RecordSchema(
    name="StaffStatistics",
    description="Daily staff attendance",
    fields=(
        string("statisticsId"),
        string("eventId"),
        date("date"),
        number("totalStaff", minimum=0),
        number("presentStaff", minimum=0),
        number("absentStaff", minimum=0),
        number("onLeaveStaff", minimum=0),
        number("sickStaff", minimum=0),
        number("overtimeHours", minimum=0),
        string("notes", optional=True),
    ),
)

TRANSPORT_REPORT = RecordSchema(
    name="TransportReport",
    description="Transport operations report",
    fields=(
        string("reportId"),
        string("eventId"),
        date("reportDate"),
        enum("reportType", ("daily", "weekly", "monthly", "incident", "summary")),
        number("totalTrips", minimum=0),
        number("totalPassengers", minimum=0),
        number("totalDistance", minimum=0, description="Kilometres"),
        number("totalFuelUsed", minimum=0, description="Litres"),
        number("totalCost", minimum=0),
        number("incidentCount", optional=True, minimum=0),
        string("notes", optional=True),
    ),
)


# ═══════════════════════════════════════════════════════════
#  Planning and coordination
# ═══════════════════════════════════════════════════════════

VAPP = RecordSchema(
    name="VAPP",
    description="Vehicle access pass / vehicle-passenger plan",
    fields=(
        string("vappId"),
        string("eventId"),
        string("vehicleId"),
        string("driverId"),
        string("routeStartLocation"),
        string("routeEndLocation"),
        string_array("routeWaypoints", optional=True),
        number("estimatedDistance", minimum=0),
        number("estimatedDuration", minimum=0),
        date("departureTime"),
        date("arrivalTime"),
        string_array("passengers", optional=True),
        enum("status", ("planned", "in-progress", "completed", "cancelled"), optional=True),
        string("notes", optional=True),
    ),
)

SHUTTLE_SYSTEM = RecordSchema(
    name="ShuttleSystem",
    description="Looping shuttle service",
    fields=(
        string("shuttleId"),
        string("eventId"),
        string("routeName"),
        string("vehicleId"),
        string("driverId"),
        date("startTime"),
        date("endTime"),
        number("frequency", minimum=1, description="Minutes between departures"),
        string_array("stops", optional=True),
        number("capacity", minimum=1),
        number("currentPassengers", minimum=0),
        enum("status", ("active", "inactive", "maintenance"), optional=True),
        string("notes", optional=True),
    ),
)


ALL_SCHEMAS: tuple[RecordSchema, ...] = (
    EVENT,
    EVENT_ACCOMMODATION,
    PASSENGER,
    VEHICLE,
    DRIVER,
    TRANSPORT_SCHEDULE,
    FLIGHT_SCHEDULE,
    HOTEL_TRANSPORTATION,
    TASK,
    DOCUMENT,
    VISA,
    AAD,
    STAFF_STATISTICS,
    TRANSPORT_REPORT,
    VAPP,
    SHUTTLE_SYSTEM,
)
