from dataclasses import dataclass, field
from datetime import datetime
from typing import List, Optional

QUOTE_STATUSES = ("pending", "reviewing", "accepted", "rejected", "completed")
APPLICATION_STATUSES = ("pending", "approved", "rejected")
APPLICATION_KINDS = ("subcontractor", "vendor")


@dataclass
class Project:
    id: int
    title: str
    category: str
    description: str
    image: str
    featured: bool = False
    created_at: datetime = field(default_factory=datetime.utcnow)


@dataclass
class Message:
    id: int
    name: str
    email: str
    message: str
    phone: Optional[str] = None
    service: Optional[str] = None
    read: bool = False
    created_at: datetime = field(default_factory=datetime.utcnow)


@dataclass
class Testimonial:
    id: int
    name: str
    position: str
    content: str
    rating: int
    company: Optional[str] = None
    image: Optional[str] = None
    approved: bool = False
    created_at: datetime = field(default_factory=datetime.utcnow)


@dataclass
class QuoteAttachment:
    id: int
    quote_request_id: int
    file_name: str
    file_url: str
    file_key: str
    file_size: int
    file_type: str


@dataclass
class QuoteRequest:
    id: int
    name: str
    email: str
    service_type: str
    description: str
    phone: Optional[str] = None
    company: Optional[str] = None
    budget: Optional[str] = None
    timeframe: Optional[str] = None
    status: str = "pending"
    reviewed: bool = False
    created_at: datetime = field(default_factory=datetime.utcnow)
    attachments: List[QuoteAttachment] = field(default_factory=list)


@dataclass
class NewsletterSubscriber:
    id: int
    email: str
    first_name: Optional[str] = None
    last_name: Optional[str] = None
    subscribed: bool = True
    created_at: datetime = field(default_factory=datetime.utcnow)


@dataclass
class Service:
    id: int
    title: str
    description: str
    icon: str
    created_at: datetime = field(default_factory=datetime.utcnow)


@dataclass
class BlogPost:
    id: int
    title: str
    slug: str
    content: str
    excerpt: str
    image: str
    category: str
    author: str
    published: bool = True
    created_at: datetime = field(default_factory=datetime.utcnow)


@dataclass
class JobPosting:
    id: int
    title: str
    department: str
    location: str
    type: str
    description: str
    responsibilities: str
    requirements: str
    benefits: Optional[str] = None
    salary: Optional[str] = None
    active: bool = True
    featured: bool = False
    created_at: datetime = field(default_factory=datetime.utcnow)


@dataclass
class TeamMember:
    id: int
    name: str
    designation: str
    qualification: Optional[str] = None
    gender: Optional[str] = None
    bio: Optional[str] = None
    photo: Optional[str] = None
    order: int = 0
    active: bool = True
    created_at: datetime = field(default_factory=datetime.utcnow)


@dataclass
class SiteSetting:
    id: int
    key: str
    value: Optional[str]
    category: str = "general"
    description: Optional[str] = None
    updated_at: datetime = field(default_factory=datetime.utcnow)


@dataclass
class Application:
    """A subcontractor or vendor asking to work with the company."""
    id: int
    kind: str
    company_name: str
    contact_name: str
    email: str
    phone: str
    address: str
    city: str
    state: str
    zip: str
    service_description: str
    years_in_business: str
    trades: List[str] = field(default_factory=list)  # service types for subcontractors, supply types for vendors
    website: Optional[str] = None
    insurance: bool = False
    bondable: bool = False
    licenses: Optional[str] = None
    references: Optional[str] = None
    how_did_you_hear: Optional[str] = None
    status: str = "pending"
    notes: Optional[str] = None
    created_at: datetime = field(default_factory=datetime.utcnow)
