from ariadne import gql

type_defs = gql(
    """
    type User {
      id: ID!
      user_name: String!
      email: String!
    }

    type Location {
      type: String!
      coordinates: [Float!]!
    }

    type Cat {
      id: ID!
      cat_name: String!
      weight: Float!
      filename: String!
      birthdate: String!
      location: Location!
      owner: User
    }

    type UserMessageResponse {
      message: String!
      user: User
    }

    type LoginMessageResponse {
      message: String!
      token: String!
      user: User!
    }

    input Coordinates {
      lat: Float!
      lng: Float!
    }

    input LocationInput {
      type: String!
      coordinates: [Float!]!
    }

    input Credentials {
      email: String!
      password: String!
    }

    input UserInput {
      user_name: String!
      email: String!
      password: String!
    }

    input UserModify {
      user_name: String
      email: String
      password: String
    }

    type Query {
      cats: [Cat!]!
      catById(id: ID!): Cat
      catsByOwner(ownerId: ID!): [Cat!]!
      catsByArea(topRight: Coordinates!, bottomLeft: Coordinates!): [Cat!]!
      users: [User!]!
      userById(id: ID!): User
      checkToken: UserMessageResponse
    }

    type Mutation {
      createCat(
        cat_name: String!
        weight: Float!
        birthdate: String!
        filename: String
        location: LocationInput
      ): Cat
      updateCat(
        id: ID!
        cat_name: String
        weight: Float
        birthdate: String
        location: LocationInput
      ): Cat
      deleteCat(id: ID!): Cat
      updateCatAsAdmin(
        id: ID!
        cat_name: String
        weight: Float
        birthdate: String
        location: LocationInput
        owner: ID
      ): Cat
      deleteCatAsAdmin(id: ID!): Cat
      login(credentials: Credentials!): LoginMessageResponse
      register(user: UserInput!): UserMessageResponse
      updateUser(user: UserModify!): UserMessageResponse
      deleteUser: UserMessageResponse
      updateUserAsAdmin(id: ID!, user: UserModify!): UserMessageResponse
      deleteUserAsAdmin(id: ID!): UserMessageResponse
    }
    """
)
